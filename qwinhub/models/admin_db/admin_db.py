import uuid
from sqlalchemy import Column, DateTime, String, Uuid
from qwinhub.core.database import Base
from qwinhub.core.timeutils import utcnow


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    email = Column(String, unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)
