from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from qwinhub.services.templates import DraftType


class DraftSave(BaseModel):
    type: DraftType
    subject: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)


class DraftOut(BaseModel):
    id: UUID
    type: DraftType
    subject: str
    content: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DraftSaveResult(BaseModel):
    draft: DraftOut
    created: bool
    missing_placeholders: List[str] = []


class DraftPreviewRequest(BaseModel):
    quiz_slug: Optional[str] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = Field(default=None, ge=2000, le=9998)


class DraftPreview(BaseModel):
    type: DraftType
    subject: str
    content: str
