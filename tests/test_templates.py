from __future__ import annotations

from types import SimpleNamespace
from datetime import datetime

import pytest

from qwinhub.core.errors import InvalidPlaceholder, InvalidQuiz
from qwinhub.services.template_values import monthly_values, result_values, share_values, winners_in_month
from qwinhub.services.templates import (
    PLACEHOLDERS,
    DraftType,
    ensure_valid_template,
    find_placeholders,
    render_template,
    validate_template,
)


def test_share_validation_splits_invalid_and_missing():
    check = validate_template(DraftType.SHARE, "Hi {{TITLE}}, click {{LINK}}, enjoy {{BOGUS}}")

    assert check.invalid == ["BOGUS"]
    assert "DEADLINE" in check.missing
    assert "OPTIONS" in check.missing
    assert "TITLE" not in check.missing
    assert not check.is_valid


def test_missing_only_is_still_valid():
    check = validate_template(DraftType.RESULT, "{{WINNER_NAME}} won {{TITLE}}")

    assert check.is_valid
    assert check.invalid == []
    assert check.missing == [n for n in PLACEHOLDERS[DraftType.RESULT] if n not in ("WINNER_NAME", "TITLE")]


def test_vocabularies_differ_per_type():
    assert validate_template(DraftType.SHARE, "{{WINNER_NAME}}").invalid == ["WINNER_NAME"]
    assert validate_template(DraftType.RESULT, "{{LINK}}").invalid == ["LINK"]
    assert validate_template(DraftType.MONTHLY, "{{MONTHLY_WINNER_PHONE}}").invalid == []


def test_only_upper_snake_tokens_are_placeholders():
    content = "{{title}} {TITLE} {{ TITLE }} {{{LINK}}} {{2X}}"
    assert find_placeholders(content) == ["LINK"]
    assert validate_template(DraftType.SHARE, content).invalid == []


def test_ensure_valid_checks_subject_and_content():
    with pytest.raises(InvalidPlaceholder) as excinfo:
        ensure_valid_template(DraftType.SHARE, "{{NOPE}}", "{{TITLE}} {{NOPE}} {{ALSO_NOPE}}")

    assert excinfo.value.names == ["NOPE", "ALSO_NOPE"]
    assert excinfo.value.code == "INVALID_PLACEHOLDER"


def test_render_replaces_every_occurrence():
    assert render_template("{{TITLE}} — {{TITLE}}", {"TITLE": "Math Quiz"}) == "Math Quiz — Math Quiz"


def test_render_leaves_unknown_tokens_verbatim():
    assert render_template("{{TITLE}} — {{TITLE}}", {}) == "{{TITLE}} — {{TITLE}}"
    assert render_template("Hi {{NAME}}", {"TITLE": "x"}) == "Hi {{NAME}}"


def test_render_is_single_pass():
    assert render_template("{{TITLE}}", {"TITLE": "{{LINK}}", "LINK": "x"}) == "{{LINK}}"


def test_render_substitutes_empty_values():
    assert render_template("[{{TITLE}}]", {"TITLE": ""}) == "[]"


def test_share_values_build_link_and_deadline():
    quiz = SimpleNamespace(
        title="Capitals",
        slug="capitals",
        options=["Paris", "Rome"],
        deadline=datetime(2026, 11, 2, 18, 30),
    )
    values = share_values(quiz, "https://qwinhub.test/")

    assert values["LINK"] == "https://qwinhub.test/quiz/capitals"
    assert values["OPTIONS"] == "Paris, Rome"
    assert values["DEADLINE"] == "November 02, 2026 06:30 PM UTC"
    assert set(values) == set(PLACEHOLDERS[DraftType.SHARE])


def test_result_values_split_participants():
    quiz = SimpleNamespace(title="Capitals", options=["Paris", "Rome"])
    responses = [
        SimpleNamespace(name="Ann", phone="+12015550123", is_correct=True),
        SimpleNamespace(name="Bob", phone="+12015550124", is_correct=False),
        SimpleNamespace(name="Cid", phone="+12015550125", is_correct=True),
    ]
    winner = SimpleNamespace(name="Cid", phone="+12015550125")

    values = result_values(quiz, responses, winner)

    assert values["TOTAL_RESPONSES"] == "3"
    assert values["CORRECT_COUNT"] == "2"
    assert values["WRONG_NAMES"] == "Bob"
    assert values["CORRECT_PHONES"] == "+12015550123, +12015550125"
    assert values["WINNER_NAME"] == "Cid"
    assert set(values) == set(PLACEHOLDERS[DraftType.RESULT])


def test_monthly_values_without_monthly_winner():
    values = monthly_values(2, 2026, [SimpleNamespace(name="Ann", phone="+1")])

    assert values["MONTH"] == "February"
    assert values["TOTAL_WINNERS"] == "1"
    assert values["MONTHLY_WINNER_NAME"] == "-"
    assert "TITLE" not in values


def test_month_past_the_calendar_range_is_rejected(db):
    with pytest.raises(InvalidQuiz):
        winners_in_month(db, 12, 9999)
