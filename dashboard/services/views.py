"""Render functions: an explicit store (plus its form) in, a screen view out."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from dashboard.services.forms import FormEditor
from dashboard.services.store import ListStore

PREVIEW_LENGTH = 20
PASSWORD_MASK = "********"


def truncate(text: str, limit: int = PREVIEW_LENGTH) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _newest_first(records: List[Any]) -> List[Any]:
    def key(record) -> float:
        created: Optional[datetime] = record.created_at
        return created.timestamp() if created else 0.0

    return sorted(records, key=key, reverse=True)


def _frame(store: ListStore, form: Optional[FormEditor]) -> Dict[str, Any]:
    view: Dict[str, Any] = {"loading": store.loading, "error": store.error}
    if form is not None:
        view["form"] = form.snapshot()
    return view


def render_messages(store: ListStore, form: Optional[FormEditor] = None) -> Dict[str, Any]:
    def card(message):
        return {**message.model_dump(mode="json"), "preview": truncate(message.body)}

    view = _frame(store, form)
    view["pinned"] = [card(m) for m in _newest_first([m for m in store.records if m.pinned])]
    view["other"] = [card(m) for m in _newest_first([m for m in store.records if not m.pinned])]
    return view


def render_orders(store: ListStore, form: Optional[FormEditor] = None) -> Dict[str, Any]:
    view = _frame(store, form)
    view["pending"] = [o.model_dump(mode="json") for o in store.records if o.status == "pending"]
    view["completed"] = [o.model_dump(mode="json") for o in store.records if o.status == "completed"]
    return view


def render_products(store: ListStore, form: Optional[FormEditor] = None) -> Dict[str, Any]:
    view = _frame(store, form)
    view["items"] = [p.model_dump(mode="json") for p in store.records]
    return view


def render_users(store: ListStore, form: Optional[FormEditor] = None) -> Dict[str, Any]:
    view = _frame(store, form)
    view["items"] = [{**u.model_dump(mode="json"), "password": PASSWORD_MASK} for u in store.records]
    return view
