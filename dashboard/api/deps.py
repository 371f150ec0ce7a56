from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from dashboard.core.security import decode_token, is_admin_email
from dashboard.db.supabase import DocumentStore, get_client
from dashboard.services.sessions import SessionRegistry

oauth2 = OAuth2PasswordBearer(tokenUrl="/api/admin/login")

_backend = None
def get_backend() -> DocumentStore:
    global _backend
    if _backend is None:
        _backend = DocumentStore(get_client())
    return _backend


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_admin(token: str = Depends(oauth2)) -> str:
    try:
        payload = decode_token(token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    email = payload.get("sub")
    if not email or not is_admin_email(email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return email
