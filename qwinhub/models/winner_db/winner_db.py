import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from qwinhub.core.database import Base
from qwinhub.core.timeutils import utcnow


class Winner(Base):
    __tablename__ = "winners"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quiz.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    selected_at = Column(DateTime, nullable=False, default=utcnow)

    quiz = relationship("Quiz", back_populates="winner")


class MonthlyWinner(Base):
    __tablename__ = "monthly_winners"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quiz.id", ondelete="CASCADE"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    selected_at = Column(DateTime, nullable=False, default=utcnow)

    quiz = relationship("Quiz", back_populates="monthly_winners")

    __table_args__ = (
        UniqueConstraint("month", "year", name="unique_monthly_winner"),
    )
