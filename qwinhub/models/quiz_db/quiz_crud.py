import logging
from datetime import datetime
from typing import Dict, Iterable, Optional
from uuid import UUID

from slugify import slugify
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from qwinhub.core.errors import InvalidQuiz, NotFound, SlugConflict
from qwinhub.core.timeutils import to_naive_utc, utcnow
from qwinhub.models.quiz_db.quiz_db import Quiz
from qwinhub.models.quiz_db.quiz_response_db import QuizResponse
from qwinhub.models.winner_db.winner_db import MonthlyWinner, Winner
from qwinhub.schemas.quiz.quiz_base import QuizCreate, QuizUpdate, check_correct_answer
from qwinhub.services.visibility import QuizStatus

logger = logging.getLogger(__name__)


def create_slug(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise InvalidQuiz("Quiz title must contain letters or digits")
    return slug


def get_quiz_by_id(db: Session, quiz_id: UUID) -> Optional[Quiz]:
    return db.query(Quiz).filter(Quiz.id == quiz_id).first()


def get_quiz_by_slug(db: Session, slug: str) -> Optional[Quiz]:
    return db.query(Quiz).filter(Quiz.slug == slug).first()


def require_quiz(db: Session, slug: str) -> Quiz:
    quiz = get_quiz_by_slug(db, slug)
    if not quiz:
        raise NotFound()
    return quiz


def _commit_or_slug_conflict(db: Session):
    try:
        db.commit()
    except IntegrityError:
        # the slug unique index is the only constraint a quiz write can trip
        db.rollback()
        raise SlugConflict()


def create_quiz(db: Session, quiz_in: QuizCreate) -> Quiz:
    slug = create_slug(quiz_in.title)
    if get_quiz_by_slug(db, slug):
        raise SlugConflict()

    quiz = Quiz(
        slug=slug,
        title=quiz_in.title,
        options=quiz_in.options,
        correct_answer=quiz_in.correct_answer,
        deadline=quiz_in.deadline,
    )
    db.add(quiz)
    _commit_or_slug_conflict(db)
    db.refresh(quiz)
    logger.info("Quiz %s created with slug %s", quiz.id, quiz.slug)
    return quiz


def update_quiz(db: Session, slug: str, updates: QuizUpdate) -> Quiz:
    quiz = require_quiz(db, slug)

    options = updates.options if updates.options is not None else list(quiz.options)
    correct_answer = updates.correct_answer if updates.correct_answer is not None else quiz.correct_answer
    try:
        check_correct_answer(options, correct_answer)
    except ValueError as exc:
        raise InvalidQuiz(str(exc))

    if updates.title:
        next_slug = create_slug(updates.title)
        if next_slug != quiz.slug and get_quiz_by_slug(db, next_slug):
            raise SlugConflict()
        quiz.title = updates.title
        quiz.slug = next_slug

    quiz.options = options
    quiz.correct_answer = correct_answer
    if updates.deadline is not None:
        quiz.deadline = updates.deadline

    _commit_or_slug_conflict(db)
    db.refresh(quiz)
    logger.info("Quiz %s updated (slug %s)", quiz.id, quiz.slug)
    return quiz


def delete_quiz(db: Session, slug: str):
    """Remove a quiz with its responses and winner rows in a single transaction."""
    quiz = require_quiz(db, slug)
    quiz_id = quiz.id
    db.expunge(quiz)

    try:
        db.query(QuizResponse).filter(QuizResponse.quiz_id == quiz_id).delete(synchronize_session=False)
        db.query(Winner).filter(Winner.quiz_id == quiz_id).delete(synchronize_session=False)
        db.query(MonthlyWinner).filter(MonthlyWinner.quiz_id == quiz_id).delete(synchronize_session=False)
        db.query(Quiz).filter(Quiz.id == quiz_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Quiz %s deleted", quiz_id)


def status_filter(status: QuizStatus, now: datetime = None):
    now = utcnow() if now is None else to_naive_utc(now)
    if status is QuizStatus.active:
        return Quiz.deadline > now
    elif status is QuizStatus.expired:
        return Quiz.deadline <= now
    raise ValueError(f"Unhandled quiz status: {status}")


def count_quizzes(db: Session, status: QuizStatus = None, now: datetime = None) -> int:
    query = db.query(Quiz)
    if status is not None:
        query = query.filter(status_filter(status, now))
    return query.count()


def response_counts(db: Session, quiz_ids: Iterable[UUID]) -> Dict[UUID, int]:
    quiz_ids = list(quiz_ids)
    if not quiz_ids:
        return {}
    rows = (
        db.query(QuizResponse.quiz_id, func.count(QuizResponse.id))
        .filter(QuizResponse.quiz_id.in_(quiz_ids))
        .group_by(QuizResponse.quiz_id)
        .all()
    )
    counts = {quiz_id: 0 for quiz_id in quiz_ids}
    counts.update({quiz_id: total for quiz_id, total in rows})
    return counts
