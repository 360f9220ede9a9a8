"""Field normalisers for noisy attendee data.

Every function here maps a raw value to a canonical form or a fallback
marker and never raises on bad input.
"""

from __future__ import annotations

import re
from datetime import datetime

from event_manager.common.constants import BAD_PHONE_NUMBER, DEFAULT_DATETIME_FORMAT, INVALID_DATE

_NON_DIGIT_RE = re.compile(r"\D")
_SPACE_RE = re.compile(r" ")


def clean_zipcode(zipcode) -> str:
    text = "" if zipcode is None else str(zipcode)
    return text.rjust(5, "0")[:5]


def clean_phone_number(phone_number) -> str:
    digits = _NON_DIGIT_RE.sub("", "" if phone_number is None else str(phone_number))
    if len(digits) == 10:
        return digits
    if len(digits) == 11 and digits[0] == "1":
        return digits[1:]
    return BAD_PHONE_NUMBER


def capitalize_name(name) -> str:
    return ("" if name is None else str(name)).capitalize()


def letter_slug(name: str) -> str:
    return _SPACE_RE.sub("-", name).lower()


def parse_registration_time(value, fmt: str = DEFAULT_DATETIME_FORMAT) -> datetime | str:
    """Parse ``value`` with ``fmt``; return ``INVALID_DATE`` when it does not conform."""
    try:
        return datetime.strptime(value, fmt)
    except (TypeError, ValueError):
        return INVALID_DATE
