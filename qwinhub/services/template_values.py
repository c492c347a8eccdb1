"""Placeholder values for each draft type, assembled from stored quiz data."""

import calendar
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from qwinhub.core.errors import InvalidQuiz, NotFound
from qwinhub.models.quiz_db.quiz_crud import require_quiz
from qwinhub.models.quiz_db.quiz_response_crud import list_responses
from qwinhub.models.winner_db.winner_db import MonthlyWinner, Winner
from qwinhub.services.templates import DraftType

EMPTY = "-"


def _join(values) -> str:
    values = [v for v in values if v]
    return ", ".join(values) if values else EMPTY


def format_deadline(deadline: datetime) -> str:
    return deadline.strftime("%B %d, %Y %I:%M %p UTC")


def quiz_link(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/quiz/{slug}"


def share_values(quiz, base_url: str) -> Dict[str, str]:
    return {
        "TITLE": quiz.title,
        "OPTIONS": _join(quiz.options),
        "LINK": quiz_link(base_url, quiz.slug),
        "DEADLINE": format_deadline(quiz.deadline),
    }


def result_values(quiz, responses, winner=None) -> Dict[str, str]:
    correct = [r for r in responses if r.is_correct]
    wrong = [r for r in responses if not r.is_correct]
    return {
        "TITLE": quiz.title,
        "OPTIONS": _join(quiz.options),
        "TOTAL_RESPONSES": str(len(responses)),
        "CORRECT_COUNT": str(len(correct)),
        "WRONG_COUNT": str(len(wrong)),
        "CORRECT_NAMES": _join(r.name for r in correct),
        "WRONG_NAMES": _join(r.name for r in wrong),
        "CORRECT_PHONES": _join(r.phone for r in correct),
        "WRONG_PHONES": _join(r.phone for r in wrong),
        "WINNER_NAME": winner.name if winner else EMPTY,
        "WINNER_PHONE": winner.phone if winner else EMPTY,
    }


def monthly_values(month: int, year: int, month_winners, monthly_winner=None) -> Dict[str, str]:
    values = {
        "MONTH": calendar.month_name[month],
        "YEAR": str(year),
        "TOTAL_WINNERS": str(len(month_winners)),
        "WINNER_NAMES": _join(w.name for w in month_winners),
        "WINNER_PHONES": _join(w.phone for w in month_winners),
        "MONTHLY_WINNER_NAME": EMPTY,
        "MONTHLY_WINNER_PHONE": EMPTY,
    }
    if monthly_winner is not None:
        values["MONTHLY_WINNER_NAME"] = monthly_winner.name
        values["MONTHLY_WINNER_PHONE"] = monthly_winner.phone
        if monthly_winner.quiz is not None:
            values["TITLE"] = monthly_winner.quiz.title
            values["OPTIONS"] = _join(monthly_winner.quiz.options)
    return values


def winners_in_month(db: Session, month: int, year: int):
    try:
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    except ValueError:
        raise InvalidQuiz(f"Unsupported month: {month}/{year}") from None
    return (
        db.query(Winner)
        .filter(Winner.selected_at >= start, Winner.selected_at < end)
        .order_by(Winner.selected_at.asc())
        .all()
    )


def get_monthly_winner(db: Session, month: int, year: int) -> Optional[MonthlyWinner]:
    return (
        db.query(MonthlyWinner)
        .filter(MonthlyWinner.month == month, MonthlyWinner.year == year)
        .first()
    )


def preview_values(
    db: Session,
    draft_type: DraftType,
    base_url: str,
    quiz_slug: str = None,
    month: int = None,
    year: int = None,
) -> Dict[str, str]:
    draft_type = DraftType(draft_type)
    if draft_type is DraftType.SHARE:
        if not quiz_slug:
            raise InvalidQuiz("quiz_slug is required for a SHARE preview")
        return share_values(require_quiz(db, quiz_slug), base_url)
    elif draft_type is DraftType.RESULT:
        if not quiz_slug:
            raise InvalidQuiz("quiz_slug is required for a RESULT preview")
        quiz = require_quiz(db, quiz_slug)
        return result_values(quiz, list_responses(db, quiz.id), quiz.winner)
    elif draft_type is DraftType.MONTHLY:
        if month is None or year is None:
            raise InvalidQuiz("month and year are required for a MONTHLY preview")
        return monthly_values(month, year, winners_in_month(db, month, year), get_monthly_winner(db, month, year))
    raise NotFound(f"Unknown draft type: {draft_type}")
