import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping

from qwinhub.core.errors import InvalidPlaceholder


class DraftType(str, Enum):
    SHARE = "SHARE"
    RESULT = "RESULT"
    MONTHLY = "MONTHLY"


PLACEHOLDERS: Dict[DraftType, tuple] = {
    DraftType.SHARE: (
        "TITLE",
        "OPTIONS",
        "LINK",
        "DEADLINE",
    ),
    DraftType.RESULT: (
        "TITLE",
        "OPTIONS",
        "TOTAL_RESPONSES",
        "CORRECT_COUNT",
        "WRONG_COUNT",
        "CORRECT_NAMES",
        "WRONG_NAMES",
        "CORRECT_PHONES",
        "WRONG_PHONES",
        "WINNER_NAME",
        "WINNER_PHONE",
    ),
    DraftType.MONTHLY: (
        "TITLE",
        "OPTIONS",
        "MONTH",
        "YEAR",
        "TOTAL_WINNERS",
        "WINNER_NAMES",
        "WINNER_PHONES",
        "MONTHLY_WINNER_NAME",
        "MONTHLY_WINNER_PHONE",
    ),
}

# {{UPPER_SNAKE}} only; any other brace usage is plain text
PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")


@dataclass
class TemplateCheck:
    missing: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.invalid


def find_placeholders(content: str) -> List[str]:
    """Placeholder names in order of first appearance, without repeats."""
    seen = []
    for name in PLACEHOLDER_PATTERN.findall(content or ""):
        if name not in seen:
            seen.append(name)
    return seen


def validate_template(draft_type: DraftType, content: str) -> TemplateCheck:
    """Split the tokens of ``content`` against the vocabulary of ``draft_type``.

    Unknown names are ``invalid`` and block saving. Known names the content never uses
    are ``missing``, which is only a warning.
    """
    recognized = PLACEHOLDERS[DraftType(draft_type)]
    found = find_placeholders(content)
    return TemplateCheck(
        missing=[name for name in recognized if name not in found],
        invalid=[name for name in found if name not in recognized],
    )


def ensure_valid_template(draft_type: DraftType, *parts: str) -> TemplateCheck:
    check = validate_template(draft_type, "\n".join(p or "" for p in parts))
    if check.invalid:
        raise InvalidPlaceholder(check.invalid)
    return check


def render_template(content: str, values: Mapping[str, str]) -> str:
    # single pass: substituted values are never re-scanned for tokens
    def _replace(match):
        name = match.group(1)
        if name in values and values[name] is not None:
            return str(values[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, content or "")
