from fastapi import Depends

from dashboard.api.deps import get_sessions
from dashboard.api.screens import add_form_routes, screen_router
from dashboard.services.sessions import SessionRegistry

router = screen_router("orders")
add_form_routes(router, "orders")


@router.post("/screens/{session_id}/records/{order_id}/complete")
def mark_completed(session_id: str, order_id: str, sessions: SessionRegistry = Depends(get_sessions)):
    session = sessions.get(session_id, "orders")
    order = session.store.mark_completed(order_id)
    return {"record": order.model_dump(mode="json"), "view": session.render()}
