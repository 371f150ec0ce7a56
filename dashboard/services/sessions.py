import logging
import threading
import time
import uuid
from typing import Any, Callable, Dict, NamedTuple, Optional

from dashboard.core import config
from dashboard.core.errors import ScreenNotFound
from dashboard.services import views
from dashboard.services.forms import FormEditor
from dashboard.services.messages_service import MessageStore
from dashboard.services.orders_service import OrderStore
from dashboard.services.products_service import ProductStore
from dashboard.services.store import ListStore
from dashboard.services.users_service import UserStore

logger = logging.getLogger(__name__)


class Screen(NamedTuple):
    store: Callable[[Any], ListStore]
    render: Callable[..., Dict[str, Any]]


SCREENS = {
    "products": Screen(ProductStore, views.render_products),
    "users": Screen(UserStore, views.render_users),
    "orders": Screen(OrderStore, views.render_orders),
    "messages": Screen(MessageStore, views.render_messages),
}


class ScreenSession:
    def __init__(self, kind: str, store: ListStore, now: float = 0.0):
        self.id = uuid.uuid4().hex
        self.kind = kind
        self.store = store
        self.form = FormEditor(store)
        self.last_seen = now

    def render(self) -> Dict[str, Any]:
        return SCREENS[self.kind].render(self.store, self.form)


class SessionRegistry:
    """Mounted screens. A session's store lives from mount to unmount only.

    Sessions idle for longer than the TTL are dropped on the next mount or
    lookup, since a closed browser tab never unmounts.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds is None:
            ttl_seconds = config.SCREEN_SESSION_TTL_MINUTES * 60
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.sessions: Dict[str, ScreenSession] = {}
        self._lock = threading.Lock()

    def _evict_idle(self, now: float) -> None:
        expired = [sid for sid, s in self.sessions.items() if now - s.last_seen > self.ttl_seconds]
        for sid in expired:
            del self.sessions[sid]
        if expired:
            logger.info("Dropped %d idle screen(s)", len(expired))

    def mount(self, kind: str, backend) -> ScreenSession:
        if kind not in SCREENS:
            raise ScreenNotFound(f"Unknown screen {kind}")
        now = self.clock()
        session = ScreenSession(kind, SCREENS[kind].store(backend), now)
        with self._lock:
            self._evict_idle(now)
            self.sessions[session.id] = session
        logger.info("Mounted %s screen %s", kind, session.id)
        session.store.load()
        return session

    def get(self, session_id: str, kind: str) -> ScreenSession:
        now = self.clock()
        with self._lock:
            self._evict_idle(now)
            session = self.sessions.get(session_id)
            if session is None or session.kind != kind:
                raise ScreenNotFound("Screen session not found")
            session.last_seen = now
        return session

    def unmount(self, session_id: str) -> None:
        with self._lock:
            session = self.sessions.pop(session_id, None)
        if session is not None:
            logger.info("Unmounted screen %s", session_id)
