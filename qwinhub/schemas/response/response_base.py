from uuid import UUID

from pydantic import BaseModel, Field


class ResponseSubmission(BaseModel):
    name: str = Field(min_length=1, max_length=100, pattern=r"^\s*[a-zA-Z][a-zA-Z\s]*$")
    country: str = Field(min_length=2, max_length=2)
    phone: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class SubmissionResult(BaseModel):
    id: UUID
    is_correct: bool
