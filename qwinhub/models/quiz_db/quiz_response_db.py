import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from qwinhub.core.database import Base
from qwinhub.core.timeutils import utcnow


class QuizResponse(Base):
    __tablename__ = "quiz_responses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quiz.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)  # E.164 identity
    answer = Column(String, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)

    quiz = relationship("Quiz", back_populates="responses")

    __table_args__ = (
        UniqueConstraint("quiz_id", "phone", name="unique_response_per_phone_per_quiz"),
    )
