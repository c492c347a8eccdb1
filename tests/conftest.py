from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from qwinhub.core.config import Settings
from qwinhub.core.database import Database
from qwinhub.core.security import create_access_token
from qwinhub.core.timeutils import utcnow
from qwinhub.main import create_app
from qwinhub.models.admin_db.admin_crud import create_admin
from qwinhub.models.draft_db.draft_db import Draft
from qwinhub.models.quiz_db.quiz_db import Quiz
from qwinhub.services.templates import DraftType

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "SecureAdmin123!"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        APP_BASE_URL="https://qwinhub.test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL, poolclass=StaticPool)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin(db):
    return create_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def admin_headers(admin, settings):
    token = create_access_token({"sub": admin.email}, settings)
    return {"Authorization": f"Bearer {token}"}


def make_quiz(
    db,
    title: str,
    deadline: datetime = None,
    created_at: datetime = None,
    options=("Paris", "London", "Rome"),
    correct_answer: str = "Paris",
    slug: str = None,
) -> Quiz:
    now = utcnow()
    quiz = Quiz(
        title=title,
        slug=slug or title.lower().replace(" ", "-"),
        options=list(options),
        correct_answer=correct_answer,
        deadline=deadline or now + timedelta(days=1),
        created_at=created_at or now,
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz


def make_drafts(db):
    contents = {
        DraftType.SHARE: ("New quiz: {{TITLE}}", "Play {{TITLE}} at {{LINK}} before {{DEADLINE}}"),
        DraftType.RESULT: ("Results: {{TITLE}}", "{{CORRECT_COUNT}} of {{TOTAL_RESPONSES}} got it. Winner: {{WINNER_NAME}}"),
        DraftType.MONTHLY: ("{{MONTH}} {{YEAR}}", "Monthly winner {{MONTHLY_WINNER_NAME}} of {{TOTAL_WINNERS}}"),
    }
    for draft_type, (subject, content) in contents.items():
        db.add(Draft(type=draft_type, subject=subject, content=content))
    db.commit()
