from typing import Optional

from sqlalchemy.orm import Session

from qwinhub.core.security import hash_password, verify_password
from qwinhub.models.admin_db.admin_db import Admin


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.email == email).first()


def create_admin(db: Session, email: str, password: str) -> Admin:
    admin = Admin(email=email, hashed_password=hash_password(password))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def authenticate_admin(db: Session, email: str, password: str) -> Optional[Admin]:
    admin = get_admin_by_email(db, email)
    if not admin or not verify_password(password, admin.hashed_password):
        return None
    return admin
