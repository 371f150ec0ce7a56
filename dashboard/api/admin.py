from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.api.deps import get_admin, get_backend
from dashboard.core.security import create_token, is_admin_email, normalize_email
from dashboard.models.schemas import AdminLogin, Token
from dashboard.services.sessions import SCREENS

router = APIRouter()


@router.post("/login", response_model=Token)
def login(payload: AdminLogin):
    if not is_admin_email(payload.email):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized email. Please enter the correct Gmail address.",
        )
    return {"access_token": create_token(normalize_email(payload.email)), "token_type": "bearer"}


@router.get("/dashboard")
def dashboard(admin=Depends(get_admin)):
    return {
        "title": "Admin Dashboard",
        "subtitle": "Manage Products, Users, Orders, and Messages with Ease",
        "sections": [{"name": kind.capitalize(), "path": f"/api/{kind}/screens"} for kind in SCREENS],
    }


@router.get("/stats")
def stats(admin=Depends(get_admin), backend=Depends(get_backend)):
    return {kind: backend.count(kind) for kind in SCREENS}
