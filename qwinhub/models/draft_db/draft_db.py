import uuid
from sqlalchemy import Column, DateTime, Enum, String, Text, Uuid
from qwinhub.core.database import Base
from qwinhub.core.timeutils import utcnow
from qwinhub.services.templates import DraftType


class Draft(Base):
    __tablename__ = "drafts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    type = Column(Enum(DraftType, name="draft_type"), unique=True, nullable=False)
    subject = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
