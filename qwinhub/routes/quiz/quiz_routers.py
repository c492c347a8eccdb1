from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from qwinhub.core.database import get_db
from qwinhub.core.security import get_optional_admin
from qwinhub.core.timeutils import utcnow
from qwinhub.models.admin_db.admin_db import Admin
from qwinhub.models.quiz_db.quiz_crud import require_quiz, response_counts
from qwinhub.models.quiz_db.quiz_response_crud import count_responses, submit_response
from qwinhub.schemas.common.page_response import CursorPage
from qwinhub.schemas.quiz.quiz_base import QuizView
from qwinhub.schemas.response.response_base import ResponseSubmission, SubmissionResult
from qwinhub.services.pagination import KeysetPage, paginate_quizzes
from qwinhub.services.phone import normalize_phone
from qwinhub.services.visibility import QuizStatus, project_quiz

quiz_router = APIRouter(tags=["Quiz"])


def resolve_page_size(request: Request, page_size: Optional[int]) -> int:
    settings = request.app.state.settings
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    return min(page_size, settings.MAX_PAGE_SIZE)


def to_view_page(db: Session, page: KeysetPage, viewer_is_admin: bool, now: datetime) -> CursorPage[QuizView]:
    counts = response_counts(db, [q.id for q in page.items]) if viewer_is_admin else {}
    return CursorPage[QuizView](
        items=[project_quiz(q, viewer_is_admin, now, counts.get(q.id)) for q in page.items],
        page_size=page.page_size,
        total=page.total,
        has_more=page.has_more,
        next_cursor=page.next_cursor,
    )


@quiz_router.get("/quizzes", response_model=CursorPage[QuizView])
def list_quizzes(
    request: Request,
    quiz_status: QuizStatus = Query(QuizStatus.active, alias="filter"),
    page_size: Optional[int] = Query(None, ge=1),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: Optional[Admin] = Depends(get_optional_admin),
    now: datetime = Depends(utcnow),
):
    page = paginate_quizzes(db, quiz_status, resolve_page_size(request, page_size), cursor, now)
    return to_view_page(db, page, admin is not None, now)


@quiz_router.get("/quiz/{slug}", response_model=QuizView)
def get_quiz(
    slug: str,
    db: Session = Depends(get_db),
    admin: Optional[Admin] = Depends(get_optional_admin),
    now: datetime = Depends(utcnow),
):
    quiz = require_quiz(db, slug)
    count = count_responses(db, quiz.id) if admin else None
    return project_quiz(quiz, admin is not None, now, count)


@quiz_router.post("/quiz/{slug}/response", response_model=SubmissionResult, status_code=status.HTTP_201_CREATED)
def submit_quiz_response(
    slug: str,
    payload: ResponseSubmission,
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    phone = normalize_phone(payload.phone, payload.country)
    quiz = require_quiz(db, slug)
    response = submit_response(db, quiz.id, payload.name, phone, payload.answer, now)
    return SubmissionResult(id=response.id, is_correct=response.is_correct)
