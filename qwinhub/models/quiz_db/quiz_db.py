import uuid
from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from qwinhub.core.database import Base
from qwinhub.core.timeutils import utcnow


class Quiz(Base):
    __tablename__ = "quiz"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        index=True
    )

    slug = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, nullable=False)
    options = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)  # ["option", ...]
    correct_answer = Column(String, nullable=False)
    deadline = Column(DateTime, nullable=False, index=True)
    is_processed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    responses = relationship("QuizResponse", back_populates="quiz", cascade="all, delete-orphan", passive_deletes=True)
    winner = relationship("Winner", back_populates="quiz", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
    monthly_winners = relationship("MonthlyWinner", back_populates="quiz", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("ix_quiz_created_at_id", "created_at", "id"),
    )
