"""Validation of inbound referral submissions.

Runs before anything is written or sent. Field presence is checked first, so a
missing email is reported as a missing field rather than a malformed one.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from ..core.exceptions import MissingFieldError, InvalidEmailFormatError

REQUIRED_FIELDS = ("referrerName", "referrerEmail", "refereeName", "refereeEmail", "course")

# JSON field name -> ReferralService.submit_referral keyword
FIELD_NAMES = {
    "referrerName": "referrer_name",
    "referrerEmail": "referrer_email",
    "refereeName": "referee_name",
    "refereeEmail": "referee_email",
    "course": "course",
}

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def validate_referral_input(payload: Any) -> Dict[str, str]:
    """Check a decoded JSON body and return the accepted fields, snake_cased.

    Raises:
        MissingFieldError: a field is absent, empty or not a string, or the
            payload is not an object at all
        InvalidEmailFormatError: either email is not ``local@domain.tld``
    """
    if not isinstance(payload, Mapping):
        raise MissingFieldError()

    for field in REQUIRED_FIELDS:
        value = payload.get(field)
        if not isinstance(value, str) or not value:
            raise MissingFieldError()

    if not (is_valid_email(payload["referrerEmail"]) and is_valid_email(payload["refereeEmail"])):
        raise InvalidEmailFormatError()

    return {FIELD_NAMES[field]: payload[field] for field in REQUIRED_FIELDS}
