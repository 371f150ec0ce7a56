from typing import Optional

from fastapi import Depends

from dashboard.api.deps import get_sessions
from dashboard.api.screens import screen_router
from dashboard.models.schemas import PinToggle
from dashboard.services.sessions import SessionRegistry

# read/pin/delete only, messages are written by the storefront
router = screen_router("messages")


@router.post("/screens/{session_id}/records/{message_id}/pin")
def toggle_pin(
    session_id: str,
    message_id: str,
    payload: Optional[PinToggle] = None,
    sessions: SessionRegistry = Depends(get_sessions),
):
    session = sessions.get(session_id, "messages")
    current = payload.current if payload else None
    message = session.store.toggle_pin(message_id, current)
    return {"record": message.model_dump(mode="json"), "view": session.render()}
