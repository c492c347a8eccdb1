from datetime import datetime
from enum import Enum
from typing import Optional

from qwinhub.core.timeutils import to_naive_utc
from qwinhub.schemas.quiz.quiz_base import QuizView, WinnerOut
from qwinhub.services.phone import mask_phone


class QuizStatus(str, Enum):
    active = "active"
    expired = "expired"


def quiz_status(deadline: datetime, now: datetime) -> QuizStatus:
    """A quiz is active strictly before its deadline and expired from the deadline on."""
    if to_naive_utc(now) < to_naive_utc(deadline):
        return QuizStatus.active
    return QuizStatus.expired


def project_winner(winner, viewer_is_admin: bool, status: QuizStatus) -> Optional[WinnerOut]:
    if winner is None:
        return None
    if viewer_is_admin:
        return WinnerOut(name=winner.name, phone=winner.phone, selected_at=winner.selected_at)
    if status is QuizStatus.active:
        return None
    elif status is QuizStatus.expired:
        return WinnerOut(name=winner.name, phone=mask_phone(winner.phone), selected_at=winner.selected_at)
    raise ValueError(f"Unhandled quiz status: {status}")


def project_quiz(quiz, viewer_is_admin: bool, now: datetime, response_count: Optional[int] = None) -> QuizView:
    """Redact a quiz row for one viewer.

    Public viewers never see the correct answer while the quiz is live, and only see
    a masked winner identity once it has expired. Admins see everything at any time.
    """
    status = quiz_status(quiz.deadline, now)

    if viewer_is_admin:
        correct_answer = quiz.correct_answer
    elif status is QuizStatus.active:
        correct_answer = None
    elif status is QuizStatus.expired:
        correct_answer = quiz.correct_answer
    else:
        raise ValueError(f"Unhandled quiz status: {status}")

    return QuizView(
        id=quiz.id,
        slug=quiz.slug,
        title=quiz.title,
        options=list(quiz.options),
        correct_answer=correct_answer,
        deadline=quiz.deadline,
        created_at=quiz.created_at,
        is_active=status is QuizStatus.active,
        is_processed=bool(quiz.is_processed),
        winner=project_winner(quiz.winner, viewer_is_admin, status),
        response_count=response_count if viewer_is_admin else None,
    )
