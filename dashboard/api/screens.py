"""Routes every screen shares, built once per entity kind."""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from dashboard.api.deps import get_admin, get_backend, get_sessions
from dashboard.models.schemas import FormChanges
from dashboard.services.sessions import SessionRegistry


def screen_router(kind: str) -> APIRouter:
    """Mount/render/refresh/unmount plus delete, which every screen offers."""
    router = APIRouter(dependencies=[Depends(get_admin)])

    @router.post("/screens", status_code=201)
    def mount(backend=Depends(get_backend), sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.mount(kind, backend)
        return {"session_id": session.id, "view": session.render()}

    @router.get("/screens/{session_id}")
    def render(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        return sessions.get(session_id, kind).render()

    @router.post("/screens/{session_id}/refresh")
    def refresh(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        session.store.load()
        return session.render()

    @router.delete("/screens/{session_id}")
    def unmount(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        sessions.get(session_id, kind)
        sessions.unmount(session_id)
        return {"unmounted": True}

    @router.get("/screens/{session_id}/records/{record_id}")
    def record_detail(session_id: str, record_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        # the full record as loaded: whole message body, unmasked password
        session = sessions.get(session_id, kind)
        return {"record": session.store.get(record_id).model_dump(mode="json")}

    @router.delete("/screens/{session_id}/records/{record_id}")
    def delete_record(
        session_id: str,
        record_id: str,
        confirm: bool = False,
        sessions: SessionRegistry = Depends(get_sessions),
    ):
        session = sessions.get(session_id, kind)
        prompts: List[str] = []

        def ask(prompt: str) -> bool:
            prompts.append(prompt)
            return confirm

        deleted = session.store.delete(record_id, ask)
        body = {"deleted": deleted, "view": session.render()}
        if not deleted:
            body["confirm"] = prompts[0]
        return body

    return router


def add_form_routes(router: APIRouter, kind: str) -> None:
    """Create/update and the add/edit form, for screens that edit records."""

    @router.post("/screens/{session_id}/records", status_code=201)
    def create_record(
        session_id: str,
        payload: Dict[str, Any] = Body(...),
        sessions: SessionRegistry = Depends(get_sessions),
    ):
        session = sessions.get(session_id, kind)
        record = session.store.create(payload)
        return {"record": record.model_dump(mode="json"), "view": session.render()}

    @router.patch("/screens/{session_id}/records/{record_id}")
    def update_record(
        session_id: str,
        record_id: str,
        payload: Dict[str, Any] = Body(...),
        sessions: SessionRegistry = Depends(get_sessions),
    ):
        session = sessions.get(session_id, kind)
        record = session.store.update(record_id, payload)
        return {"record": record.model_dump(mode="json"), "view": session.render()}

    @router.post("/screens/{session_id}/form/add")
    def open_add(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        session.form.open_add()
        return session.render()

    @router.post("/screens/{session_id}/form/edit/{record_id}")
    def open_edit(session_id: str, record_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        session.form.open_edit(record_id)
        return session.render()

    @router.patch("/screens/{session_id}/form")
    def change_form(session_id: str, changes: FormChanges, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        for field, value in changes.fields.items():
            session.form.change(field, value)
        return session.render()

    @router.post("/screens/{session_id}/form/submit")
    def submit_form(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        record = session.form.submit()
        return {"record": record.model_dump(mode="json"), "view": session.render()}

    @router.post("/screens/{session_id}/form/cancel")
    def cancel_form(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
        session = sessions.get(session_id, kind)
        session.form.cancel()
        return session.render()
