import logging
import re

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

from qwinhub.core.errors import ContainsLetters, InvalidCharacters, InvalidForRegion

logger = logging.getLogger(__name__)

ALLOWED_PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")
REGION_PATTERN = re.compile(r"^[A-Za-z]{2}$")

MASK_TOKEN = "****"


def normalize_phone(raw_phone: str, country_code: str) -> str:
    """Canonicalize a typed phone number to E.164 for the given ISO 3166-1 region.

    Letters are rejected before the character whitelist is applied, so "12a34" reports
    ``ContainsLetters`` rather than ``InvalidCharacters``. Nothing is parsed until both
    character checks pass.
    """
    raw = (raw_phone or "").strip()
    if any(ch.isalpha() for ch in raw):
        raise ContainsLetters()
    if not ALLOWED_PHONE_PATTERN.match(raw) or not any(ch.isdigit() for ch in raw):
        raise InvalidCharacters()

    region = (country_code or "").strip().upper()
    if not REGION_PATTERN.match(region) or region not in phonenumbers.SUPPORTED_REGIONS:
        raise InvalidForRegion()

    try:
        parsed = phonenumbers.parse(raw, region)
    except NumberParseException:
        raise InvalidForRegion() from None

    if not phonenumbers.is_valid_number_for_region(parsed, region):
        raise InvalidForRegion()

    return phonenumbers.format_number(parsed, PhoneNumberFormat.E164)


def mask_phone(identity: str) -> str:
    """Partially redact an E.164 identity, e.g. ``+14155550123`` -> ``+1 415****123``.

    Keeps the calling code plus the first and last k national digits (k=3 from seven
    digits up, otherwise 2). Identities that cannot be parsed come back as the bare
    mask token.
    """
    if not identity:
        return MASK_TOKEN
    try:
        parsed = phonenumbers.parse(identity, None)
    except NumberParseException:
        logger.warning("Could not parse stored identity for masking; using placeholder")
        return MASK_TOKEN

    national = phonenumbers.national_significant_number(parsed)
    if not national:
        return MASK_TOKEN

    keep = 3 if len(national) >= 7 else 2
    # at least one digit must stay hidden
    keep = min(keep, (len(national) - 1) // 2)
    if keep <= 0:
        return f"+{parsed.country_code} {MASK_TOKEN}"

    return f"+{parsed.country_code} {national[:keep]}{MASK_TOKEN}{national[-keep:]}"
