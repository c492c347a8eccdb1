import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from qwinhub.core.errors import DuplicateSubmission, Expired, NotFound
from qwinhub.core.timeutils import to_naive_utc
from qwinhub.models.quiz_db.quiz_db import Quiz
from qwinhub.models.quiz_db.quiz_response_db import QuizResponse
from qwinhub.services.phone import mask_phone
from qwinhub.services.visibility import QuizStatus, quiz_status

logger = logging.getLogger(__name__)


def find_response(db: Session, quiz_id: UUID, phone: str) -> Optional[QuizResponse]:
    return (
        db.query(QuizResponse)
        .filter(QuizResponse.quiz_id == quiz_id, QuizResponse.phone == phone)
        .first()
    )


def submit_response(db: Session, quiz_id: UUID, name: str, phone: str, answer: str, now: datetime) -> QuizResponse:
    """Record the one and only response of ``phone`` to a quiz.

    Checks run in a fixed order: the quiz must exist, must still be active, and must
    not already hold a response for this identity. Uniqueness is left to the
    ``(quiz_id, phone)`` constraint so two racing submissions cannot both land; the
    loser is reported as ``DuplicateSubmission``.
    """
    quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
    if not quiz:
        raise NotFound()
    if quiz_status(quiz.deadline, now) is not QuizStatus.active:
        raise Expired()

    answer = answer.strip()
    response = QuizResponse(
        quiz_id=quiz.id,
        name=name.strip(),
        phone=phone,
        answer=answer,
        is_correct=answer == quiz.correct_answer,
        submitted_at=to_naive_utc(now),
    )
    db.add(response)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if find_response(db, quiz_id, phone) is not None:
            logger.info("Duplicate submission rejected for quiz %s from %s", quiz_id, mask_phone(phone))
            raise DuplicateSubmission()
        if db.query(Quiz.id).filter(Quiz.id == quiz_id).first() is None:
            raise NotFound()
        raise

    db.refresh(response)
    logger.info("Response %s accepted for quiz %s (correct=%s)", response.id, quiz_id, response.is_correct)
    return response


def list_responses(db: Session, quiz_id: UUID) -> List[QuizResponse]:
    return (
        db.query(QuizResponse)
        .filter(QuizResponse.quiz_id == quiz_id)
        .order_by(QuizResponse.submitted_at.asc())
        .all()
    )


def count_responses(db: Session, quiz_id: UUID = None) -> int:
    query = db.query(QuizResponse)
    if quiz_id is not None:
        query = query.filter(QuizResponse.quiz_id == quiz_id)
    return query.count()
