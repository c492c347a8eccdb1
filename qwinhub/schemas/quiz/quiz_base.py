from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from qwinhub.core.timeutils import to_naive_utc, utcnow

MIN_OPTIONS = 2
MAX_OPTIONS = 6


def clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Quiz title is required")
    if len(title) > 200:
        raise ValueError("Title too long")
    return title


def clean_options(options: List[str]) -> List[str]:
    cleaned = [(o or "").strip() for o in options]
    if any(not o for o in cleaned):
        raise ValueError("Option cannot be empty")
    if len(cleaned) < MIN_OPTIONS:
        raise ValueError(f"At least {MIN_OPTIONS} options are required")
    if len(cleaned) > MAX_OPTIONS:
        raise ValueError(f"Maximum {MAX_OPTIONS} options allowed")
    if len({o.casefold() for o in cleaned}) != len(cleaned):
        raise ValueError("All options must be unique")
    return cleaned


def check_correct_answer(options: List[str], correct_answer: str):
    if correct_answer not in options:
        raise ValueError("Correct answer must match one of the options exactly")


def clean_deadline(deadline: datetime) -> datetime:
    deadline = to_naive_utc(deadline)
    if deadline <= utcnow():
        raise ValueError("Deadline must be in the future")
    return deadline


class QuizBase(BaseModel):
    title: str
    options: List[str]
    correct_answer: str
    deadline: datetime


class QuizCreate(QuizBase):
    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return clean_title(value)

    @field_validator("options")
    @classmethod
    def check_options(cls, value: List[str]) -> List[str]:
        return clean_options(value)

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, value: datetime) -> datetime:
        return clean_deadline(value)

    @field_validator("correct_answer")
    @classmethod
    def strip_answer(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Correct answer is required")
        return value

    @model_validator(mode="after")
    def answer_in_options(self):
        check_correct_answer(self.options, self.correct_answer)
        return self


class QuizUpdate(BaseModel):
    title: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    deadline: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return None if value is None else clean_title(value)

    @field_validator("options")
    @classmethod
    def check_options(cls, value):
        return None if value is None else clean_options(value)

    @field_validator("correct_answer")
    @classmethod
    def strip_answer(cls, value):
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Correct answer cannot be empty")
        return value

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, value):
        return None if value is None else clean_deadline(value)


class QuizCreated(BaseModel):
    id: UUID
    slug: str
    title: str

    model_config = ConfigDict(from_attributes=True)


class WinnerOut(BaseModel):
    name: str
    phone: str
    selected_at: datetime


class QuizView(BaseModel):
    """A quiz as one particular viewer is allowed to see it."""
    id: UUID
    slug: str
    title: str
    options: List[str]
    correct_answer: Optional[str] = None
    deadline: datetime
    created_at: datetime
    is_active: bool
    is_processed: bool = False
    winner: Optional[WinnerOut] = None
    response_count: Optional[int] = None


class ParticipantOut(BaseModel):
    name: str
    phone: str
    answer: str
    is_correct: bool
    submitted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuizStats(BaseModel):
    total: int
    correct: int
    wrong: int
    correct_percentage: float
    wrong_percentage: float


class QuizResults(BaseModel):
    quiz: QuizView
    stats: QuizStats
    correct: List[ParticipantOut] = Field(default_factory=list)
    wrong: List[ParticipantOut] = Field(default_factory=list)


class AdminStats(BaseModel):
    total_quizzes: int
    active_quizzes: int
    total_responses: int
