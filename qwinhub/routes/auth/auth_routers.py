from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from qwinhub.core.database import get_db
from qwinhub.core.errors import NotAuthenticated
from qwinhub.core.security import create_access_token, require_admin
from qwinhub.models.admin_db.admin_crud import authenticate_admin
from qwinhub.models.admin_db.admin_db import Admin
from qwinhub.schemas.login.login_base import AdminOut, LoginRequest

auth_router = APIRouter(prefix="/admin/auth", tags=["Auth"])


@auth_router.post("/login")
def login(payload: LoginRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, payload.email, payload.password)
    if not admin:
        raise NotAuthenticated("Invalid email or password")

    settings = request.app.state.settings
    token = create_access_token({"sub": admin.email}, settings)
    response.set_cookie(
        settings.ADMIN_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )
    return {"user": AdminOut.model_validate(admin), "token": token}


@auth_router.post("/logout")
def logout(request: Request, response: Response):
    settings = request.app.state.settings
    response.delete_cookie(
        settings.ADMIN_COOKIE_NAME,
        path="/",
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
    return {"message": "Logout successful"}


@auth_router.get("/check", response_model=AdminOut)
def check(current_admin: Admin = Depends(require_admin)):
    return current_admin
