from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from qwinhub.services.phone import MASK_TOKEN
from qwinhub.services.visibility import QuizStatus, project_quiz, quiz_status

DEADLINE = datetime(2026, 3, 1, 10, 0, 0)


def _quiz(winner=None):
    return SimpleNamespace(
        id=uuid.uuid4(),
        slug="capitals",
        title="Capitals",
        options=["Paris", "London"],
        correct_answer="Paris",
        deadline=DEADLINE,
        created_at=DEADLINE - timedelta(days=2),
        is_processed=False,
        winner=winner,
    )


def _winner(phone="+14155550123"):
    return SimpleNamespace(name="Ann", phone=phone, selected_at=DEADLINE + timedelta(hours=1))


def test_status_is_derived_from_deadline():
    assert quiz_status(DEADLINE, DEADLINE - timedelta(seconds=1)) is QuizStatus.active
    assert quiz_status(DEADLINE, DEADLINE) is QuizStatus.expired
    assert quiz_status(DEADLINE, DEADLINE + timedelta(seconds=1)) is QuizStatus.expired


def test_status_accepts_aware_now():
    aware = DEADLINE.replace(tzinfo=timezone.utc) - timedelta(seconds=1)
    assert quiz_status(DEADLINE, aware) is QuizStatus.active


def test_public_viewer_of_active_quiz_never_sees_answer():
    view = project_quiz(_quiz(), viewer_is_admin=False, now=DEADLINE - timedelta(seconds=1))

    assert view.correct_answer is None
    assert view.is_active is True


def test_public_viewer_of_expired_quiz_sees_answer():
    view = project_quiz(_quiz(), viewer_is_admin=False, now=DEADLINE + timedelta(seconds=1))

    assert view.correct_answer == "Paris"
    assert view.is_active is False


@pytest.mark.parametrize("offset", [-3600, -1, 0, 1, 3600])
def test_admin_always_sees_answer(offset):
    view = project_quiz(_quiz(), viewer_is_admin=True, now=DEADLINE + timedelta(seconds=offset))
    assert view.correct_answer == "Paris"


def test_public_winner_identity_is_masked():
    view = project_quiz(_quiz(_winner()), viewer_is_admin=False, now=DEADLINE + timedelta(days=1))

    assert view.winner.name == "Ann"
    assert view.winner.phone == "+1 415" + MASK_TOKEN + "123"


def test_admin_winner_identity_is_not_masked():
    view = project_quiz(_quiz(_winner()), viewer_is_admin=True, now=DEADLINE + timedelta(days=1))
    assert view.winner.phone == "+14155550123"


def test_public_viewer_of_active_quiz_gets_no_winner():
    view = project_quiz(_quiz(_winner()), viewer_is_admin=False, now=DEADLINE - timedelta(days=1))
    assert view.winner is None


def test_unparseable_winner_identity_falls_back_to_mask():
    view = project_quiz(_quiz(_winner("garbage")), viewer_is_admin=False, now=DEADLINE + timedelta(days=1))
    assert view.winner.phone == MASK_TOKEN


def test_response_count_only_for_admin():
    quiz = _quiz()
    assert project_quiz(quiz, False, DEADLINE, response_count=4).response_count is None
    assert project_quiz(quiz, True, DEADLINE, response_count=4).response_count == 4
