from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from qwinhub.core.database import get_db
from qwinhub.core.errors import DraftsMissing
from qwinhub.core.security import require_admin
from qwinhub.core.timeutils import utcnow
from qwinhub.models.draft_db.draft_crud import drafts_complete
from qwinhub.models.quiz_db.quiz_crud import count_quizzes, create_quiz, delete_quiz, require_quiz, update_quiz
from qwinhub.models.quiz_db.quiz_response_crud import count_responses, list_responses
from qwinhub.routes.quiz.quiz_routers import resolve_page_size, to_view_page
from qwinhub.schemas.common.page_response import CursorPage
from qwinhub.schemas.quiz.quiz_base import (
    AdminStats,
    ParticipantOut,
    QuizCreate,
    QuizCreated,
    QuizResults,
    QuizStats,
    QuizUpdate,
    QuizView,
)
from qwinhub.services.pagination import paginate_quizzes
from qwinhub.services.visibility import QuizStatus, project_quiz

admin_quiz_router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@admin_quiz_router.post("/quizzes", response_model=QuizCreated, status_code=status.HTTP_201_CREATED)
def create_quiz_route(quiz_in: QuizCreate, db: Session = Depends(get_db)):
    if not drafts_complete(db):
        raise DraftsMissing()
    return create_quiz(db, quiz_in)


@admin_quiz_router.get("/quizzes", response_model=CursorPage[QuizView])
def list_admin_quizzes(
    request: Request,
    quiz_status: QuizStatus = Query(QuizStatus.active, alias="filter"),
    page_size: Optional[int] = Query(None, ge=1),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    page = paginate_quizzes(db, quiz_status, resolve_page_size(request, page_size), cursor, now)
    return to_view_page(db, page, True, now)


@admin_quiz_router.get("/quizzes/{slug}", response_model=QuizView)
def get_admin_quiz(slug: str, db: Session = Depends(get_db), now: datetime = Depends(utcnow)):
    quiz = require_quiz(db, slug)
    return project_quiz(quiz, True, now, count_responses(db, quiz.id))


@admin_quiz_router.patch("/quizzes/{slug}", response_model=QuizView)
def update_quiz_route(slug: str, updates: QuizUpdate, db: Session = Depends(get_db), now: datetime = Depends(utcnow)):
    quiz = update_quiz(db, slug, updates)
    return project_quiz(quiz, True, now, count_responses(db, quiz.id))


@admin_quiz_router.delete("/quizzes/{slug}")
def delete_quiz_route(slug: str, db: Session = Depends(get_db)):
    delete_quiz(db, slug)
    return {"message": "Quiz deleted successfully"}


@admin_quiz_router.get("/quizzes/{slug}/responses", response_model=QuizResults)
def quiz_results(slug: str, db: Session = Depends(get_db), now: datetime = Depends(utcnow)):
    quiz = require_quiz(db, slug)
    responses = list_responses(db, quiz.id)

    correct = [ParticipantOut.model_validate(r) for r in responses if r.is_correct]
    wrong = [ParticipantOut.model_validate(r) for r in responses if not r.is_correct]
    total = len(responses)

    return QuizResults(
        quiz=project_quiz(quiz, True, now, total),
        stats=QuizStats(
            total=total,
            correct=len(correct),
            wrong=len(wrong),
            correct_percentage=round(100 * len(correct) / total, 2) if total else 0.0,
            wrong_percentage=round(100 * len(wrong) / total, 2) if total else 0.0,
        ),
        correct=correct,
        wrong=wrong,
    )


@admin_quiz_router.get("/stats", response_model=AdminStats)
def admin_stats(db: Session = Depends(get_db), now: datetime = Depends(utcnow)):
    return AdminStats(
        total_quizzes=count_quizzes(db),
        active_quizzes=count_quizzes(db, QuizStatus.active, now),
        total_responses=count_responses(db),
    )
