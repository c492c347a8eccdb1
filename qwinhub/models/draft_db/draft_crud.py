import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from qwinhub.core.errors import NotFound
from qwinhub.core.timeutils import utcnow
from qwinhub.models.draft_db.draft_db import Draft
from qwinhub.schemas.draft.draft_base import DraftSave
from qwinhub.services.templates import DraftType, TemplateCheck, ensure_valid_template

logger = logging.getLogger(__name__)


def get_drafts(db: Session) -> List[Draft]:
    return db.query(Draft).order_by(Draft.type.asc(), Draft.updated_at.desc()).all()


def get_draft(db: Session, draft_type: DraftType) -> Optional[Draft]:
    return db.query(Draft).filter(Draft.type == DraftType(draft_type)).first()


def drafts_complete(db: Session) -> bool:
    return db.query(Draft).filter(Draft.type.in_(list(DraftType))).count() == len(DraftType)


def save_draft(db: Session, draft_in: DraftSave) -> Tuple[Draft, bool, TemplateCheck]:
    """Create or replace the draft of ``draft_in.type``.

    Unknown placeholders in the subject or content raise ``InvalidPlaceholder``; the
    returned check lists recognised placeholders the draft does not use.
    """
    check = ensure_valid_template(draft_in.type, draft_in.subject, draft_in.content)

    draft = get_draft(db, draft_in.type)
    created = draft is None
    if created:
        draft = Draft(type=draft_in.type, subject=draft_in.subject, content=draft_in.content)
        db.add(draft)
    else:
        draft.subject = draft_in.subject
        draft.content = draft_in.content
        draft.updated_at = utcnow()

    db.commit()
    db.refresh(draft)
    logger.info("%s draft %s", draft.type.value, "created" if created else "updated")
    return draft, created, check


def delete_draft(db: Session, draft_type: DraftType):
    draft = get_draft(db, draft_type)
    if not draft:
        raise NotFound("Draft not found")
    db.delete(draft)
    db.commit()
    logger.info("%s draft deleted", draft.type.value)
