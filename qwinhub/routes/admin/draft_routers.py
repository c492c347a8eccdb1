from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from qwinhub.core.database import get_db
from qwinhub.core.errors import NotFound
from qwinhub.core.security import require_admin
from qwinhub.models.draft_db.draft_crud import delete_draft, get_draft, get_drafts, save_draft
from qwinhub.schemas.draft.draft_base import DraftOut, DraftPreview, DraftPreviewRequest, DraftSave, DraftSaveResult
from qwinhub.services.template_values import preview_values
from qwinhub.services.templates import DraftType, render_template

draft_router = APIRouter(prefix="/admin/drafts", tags=["Drafts"], dependencies=[Depends(require_admin)])


@draft_router.get("", response_model=List[DraftOut])
def list_drafts(db: Session = Depends(get_db)):
    return get_drafts(db)


@draft_router.post("", response_model=DraftSaveResult)
def save_draft_route(draft_in: DraftSave, db: Session = Depends(get_db)):
    draft, created, check = save_draft(db, draft_in)
    return DraftSaveResult(
        draft=DraftOut.model_validate(draft),
        created=created,
        missing_placeholders=check.missing,
    )


@draft_router.delete("/{draft_type}")
def delete_draft_route(draft_type: DraftType, db: Session = Depends(get_db)):
    delete_draft(db, draft_type)
    return {"message": f"{draft_type.value} draft deleted successfully"}


@draft_router.post("/{draft_type}/preview", response_model=DraftPreview)
def preview_draft(
    draft_type: DraftType,
    payload: DraftPreviewRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    draft = get_draft(db, draft_type)
    if not draft:
        raise NotFound("Draft not found")

    values = preview_values(
        db,
        draft_type,
        request.app.state.settings.APP_BASE_URL,
        quiz_slug=payload.quiz_slug,
        month=payload.month,
        year=payload.year,
    )
    return DraftPreview(
        type=draft_type,
        subject=render_template(draft.subject, values),
        content=render_template(draft.content, values),
    )
