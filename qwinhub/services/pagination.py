import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from qwinhub.core.errors import MalformedCursor
from qwinhub.core.timeutils import to_naive_utc, utcnow
from qwinhub.models.quiz_db.quiz_crud import count_quizzes, status_filter
from qwinhub.models.quiz_db.quiz_db import Quiz
from qwinhub.services.visibility import QuizStatus

logger = logging.getLogger(__name__)

CURSOR_VERSION = 1


@dataclass(frozen=True)
class Cursor:
    """Position after the last row served, in ``(created_at desc, id desc)`` order."""
    created_at: datetime
    id: UUID

    def encode(self) -> str:
        payload = {"v": CURSOR_VERSION, "ts": self.created_at.isoformat(), "id": str(self.id)}
        raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @classmethod
    def decode(cls, token: str) -> "Cursor":
        try:
            padded = token + "=" * (-len(token) % 4)
            payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
            if payload.get("v") != CURSOR_VERSION:
                raise MalformedCursor(f"Unsupported cursor version: {payload.get('v')!r}")
            return cls(
                created_at=to_naive_utc(datetime.fromisoformat(payload["ts"])),
                id=UUID(payload["id"]),
            )
        except MalformedCursor:
            raise
        except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise MalformedCursor(str(exc))

    @classmethod
    def after(cls, quiz: Quiz) -> "Cursor":
        return cls(created_at=quiz.created_at, id=quiz.id)


@dataclass
class KeysetPage:
    items: List[Quiz] = field(default_factory=list)
    page_size: int = 0
    total: int = 0
    has_more: bool = False
    next_cursor: Optional[str] = None


def parse_cursor(token: Optional[str]) -> Optional[Cursor]:
    """Decode a client cursor; anything unreadable means "start from the first page"."""
    if not token:
        return None
    try:
        return Cursor.decode(token)
    except MalformedCursor as exc:
        logger.warning("Ignoring malformed cursor: %s", exc.message)
        return None


def paginate_quizzes(
    db: Session,
    status: QuizStatus,
    page_size: int,
    cursor: Optional[str] = None,
    now: datetime = None,
) -> KeysetPage:
    """One page of quizzes in ``status`` ordered newest first.

    The cursor pins the page to the last ``(created_at, id)`` already served, so rows
    inserted meanwhile can neither shift nor repeat entries on later pages. ``total``
    counts every quiz in ``status`` regardless of the cursor.
    """
    status = QuizStatus(status)
    now = utcnow() if now is None else now
    lifecycle = status_filter(status, now)

    query = db.query(Quiz).filter(lifecycle)
    position = parse_cursor(cursor)
    if position is not None:
        query = query.filter(
            or_(
                Quiz.created_at < position.created_at,
                and_(Quiz.created_at == position.created_at, Quiz.id < position.id),
            )
        )

    items = query.order_by(Quiz.created_at.desc(), Quiz.id.desc()).limit(page_size).all()
    total = count_quizzes(db, status, now)

    has_more = len(items) == page_size and page_size > 0
    next_cursor = Cursor.after(items[-1]).encode() if has_more else None
    return KeysetPage(items=items, page_size=page_size, total=total, has_more=has_more, next_cursor=next_cursor)
