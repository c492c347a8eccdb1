import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from qwinhub.core.config import Settings
from qwinhub.core.database import get_db
from qwinhub.core.errors import NotAuthenticated
from qwinhub.models.admin_db.admin_db import Admin

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/admin/auth/login", auto_error=False)


# Password hashing
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Token generation
def create_access_token(data: dict, settings: Settings, expires_delta: timedelta = None) -> str:
    to_encode = data.copy()
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "role": "admin"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


# Token verification
def verify_token(token: str, settings: Settings) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected admin token: %s", exc)
        return None
    if payload.get("role") != "admin" or not payload.get("sub"):
        return None
    return payload


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_optional_admin(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[Admin]:
    """The authenticated admin behind this request, or ``None`` for public callers."""
    settings = get_settings_from_app(request)
    token = request.cookies.get(settings.ADMIN_COOKIE_NAME) or bearer
    if not token:
        return None

    payload = verify_token(token, settings)
    if payload is None:
        return None
    return db.query(Admin).filter(Admin.email == payload["sub"]).first()


def require_admin(admin: Optional[Admin] = Depends(get_optional_admin)) -> Admin:
    if admin is None:
        raise NotAuthenticated()
    return admin
