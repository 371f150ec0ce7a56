from fastapi import Depends, File, UploadFile

from dashboard.api.deps import get_sessions
from dashboard.api.screens import add_form_routes, screen_router
from dashboard.services.sessions import SessionRegistry

router = screen_router("products")
add_form_routes(router, "products")


@router.post("/screens/{session_id}/form/image")
def upload_image(session_id: str, image: UploadFile = File(...), sessions: SessionRegistry = Depends(get_sessions)):
    session = sessions.get(session_id, "products")
    session.form.require_open()
    content = image.file.read()
    asset = session.store.upload_image(content, image.filename, image.content_type or "application/octet-stream")
    session.form.set_image(asset)
    return session.render()
