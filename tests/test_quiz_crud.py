from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from conftest import make_quiz
from qwinhub.core.errors import InvalidQuiz, NotFound, SlugConflict
from qwinhub.core.timeutils import utcnow
from qwinhub.models.quiz_db.quiz_crud import (
    create_quiz,
    delete_quiz,
    get_quiz_by_id,
    require_quiz,
    update_quiz,
)
from qwinhub.models.quiz_db.quiz_response_crud import count_responses, find_response, submit_response
from qwinhub.models.winner_db.winner_db import MonthlyWinner, Winner
from qwinhub.schemas.quiz.quiz_base import ParticipantOut, QuizCreate, QuizCreated, QuizUpdate


def _payload(**overrides):
    data = {
        "title": "  Capital of France?  ",
        "options": [" Paris ", "London", "Rome"],
        "correct_answer": "Paris ",
        "deadline": (utcnow() + timedelta(days=1)).isoformat(),
    }
    data.update(overrides)
    return data


def test_create_trims_and_slugs(db):
    quiz = create_quiz(db, QuizCreate(**_payload()))

    assert quiz.title == "Capital of France?"
    assert quiz.slug == "capital-of-france"
    assert quiz.options == ["Paris", "London", "Rome"]
    assert quiz.correct_answer == "Paris"
    assert quiz.is_processed is False


def test_aware_deadline_is_stored_as_utc(db):
    quiz = create_quiz(db, QuizCreate(**_payload(deadline="2099-01-01T12:00:00+02:00")))
    assert quiz.deadline.isoformat() == "2099-01-01T10:00:00"


@pytest.mark.parametrize(
    "overrides",
    [
        {"options": ["Paris", "paris", "Rome"]},
        {"options": ["Paris"]},
        {"options": ["a", "b", "c", "d", "e", "f", "g"]},
        {"options": ["Paris", "  "]},
        {"correct_answer": "Berlin"},
        {"correct_answer": "paris"},
        {"title": "   "},
        {"title": "x" * 201},
        {"deadline": (utcnow() - timedelta(minutes=1)).isoformat()},
    ],
)
def test_create_rejects_invalid_quizzes(overrides):
    with pytest.raises(ValidationError):
        QuizCreate(**_payload(**overrides))


def test_title_without_slug_characters_is_rejected(db):
    with pytest.raises(InvalidQuiz):
        create_quiz(db, QuizCreate(**_payload(title="???")))


def test_duplicate_slug_conflicts(db):
    create_quiz(db, QuizCreate(**_payload()))
    with pytest.raises(SlugConflict):
        create_quiz(db, QuizCreate(**_payload(title="Capital of  FRANCE")))


def test_title_update_regenerates_slug(db):
    quiz = create_quiz(db, QuizCreate(**_payload()))

    updated = update_quiz(db, quiz.slug, QuizUpdate(title="Capital of Italy?", correct_answer="Rome"))

    assert updated.slug == "capital-of-italy"
    assert updated.correct_answer == "Rome"
    assert require_quiz(db, "capital-of-italy").id == quiz.id
    with pytest.raises(NotFound):
        require_quiz(db, "capital-of-france")


def test_title_update_conflicting_slug(db):
    create_quiz(db, QuizCreate(**_payload(title="Taken")))
    quiz = create_quiz(db, QuizCreate(**_payload()))

    with pytest.raises(SlugConflict):
        update_quiz(db, quiz.slug, QuizUpdate(title="taken"))


def test_same_title_update_keeps_slug(db):
    quiz = create_quiz(db, QuizCreate(**_payload()))
    updated = update_quiz(db, quiz.slug, QuizUpdate(title="Capital of France?"))
    assert updated.slug == quiz.slug


def test_options_update_must_keep_correct_answer(db):
    quiz = create_quiz(db, QuizCreate(**_payload()))

    with pytest.raises(InvalidQuiz):
        update_quiz(db, quiz.slug, QuizUpdate(options=["London", "Rome"]))

    updated = update_quiz(db, quiz.slug, QuizUpdate(options=["London", "Rome"], correct_answer="Rome"))
    assert updated.options == ["London", "Rome"]


def test_update_unknown_quiz(db):
    with pytest.raises(NotFound):
        update_quiz(db, "missing", QuizUpdate(title="Anything"))


def test_delete_removes_responses_and_winners(db):
    quiz = make_quiz(db, "Capitals", deadline=utcnow() + timedelta(hours=1))
    submit_response(db, quiz.id, "Ann", "+12015550123", "Paris", utcnow())
    db.add(Winner(quiz_id=quiz.id, name="Ann", phone="+12015550123"))
    db.add(MonthlyWinner(quiz_id=quiz.id, month=10, year=2026, name="Ann", phone="+12015550123"))
    db.commit()
    quiz_id = quiz.id

    delete_quiz(db, "capitals")

    assert get_quiz_by_id(db, quiz_id) is None
    assert count_responses(db, quiz_id) == 0
    assert find_response(db, quiz_id, "+12015550123") is None
    assert db.query(Winner).filter(Winner.quiz_id == quiz_id).count() == 0
    assert db.query(MonthlyWinner).filter(MonthlyWinner.quiz_id == quiz_id).count() == 0
    with pytest.raises(NotFound):
        require_quiz(db, "capitals")


def test_delete_unknown_quiz(db):
    with pytest.raises(NotFound):
        delete_quiz(db, "missing")


@pytest.mark.parametrize(
    "overrides",
    [
        {"options": ["Paris", "paris"]},
        {"options": ["Paris", " PARIS "]},
        {"options": ["Paris"]},
        {"correct_answer": "   "},
        {"title": "   "},
        {"deadline": (utcnow() - timedelta(minutes=1)).isoformat()},
    ],
)
def test_update_rejects_invalid_fields(overrides):
    with pytest.raises(ValidationError):
        QuizUpdate(**overrides)


def test_update_keeps_answer_when_not_sent(db):
    quiz = create_quiz(db, QuizCreate(**_payload()))

    updated = update_quiz(db, quiz.slug, QuizUpdate(options=["Paris", "Berlin"]))

    assert updated.correct_answer == "Paris"
    assert updated.options == ["Paris", "Berlin"]


def test_response_schemas_read_orm_rows(db):
    quiz = make_quiz(db, "Capitals", deadline=utcnow() + timedelta(hours=1))
    submit_response(db, quiz.id, "Ann", "+12015550123", "Paris", utcnow())

    created = QuizCreated.model_validate(quiz)
    participant = ParticipantOut.model_validate(find_response(db, quiz.id, "+12015550123"))

    assert created.slug == "capitals"
    assert participant.is_correct is True
    assert "Config" not in vars(ParticipantOut)
