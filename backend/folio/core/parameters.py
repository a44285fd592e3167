"""Filter Parameters — normalizers that validate raw filter values before store access.

Every normalizer has the signature (name, raw) -> normalized and raises
ValidationError naming the parameter on bad input.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Callable

from folio.core import tuid
from folio.core.errors import ValidationError

Normalizer = Callable[[str, str], str]


def as_is(name: str, raw: str) -> str:
    return raw


def lowercase(name: str, raw: str) -> str:
    return raw.strip().lower()


def tuid_value(name: str, raw: str) -> str:
    if not tuid.is_valid(raw):
        raise ValidationError(f"{name} must be a valid TUID, got {raw!r}", name)
    return raw


def iso_date(name: str, raw: str) -> str:
    """Validate a yyyy-mm-dd date and return it unchanged."""
    parse_date(name, raw)
    return raw


def parse_date(name: str, raw: str) -> date:
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{name} must be a date (yyyy-mm-dd), got {raw!r}", name)


def enum_value(enum: type[Enum]) -> Normalizer:
    """Upper-case the raw value and require it to be a member value of `enum`."""
    allowed = [m.value for m in enum]

    def normalize(name: str, raw: str) -> str:
        value = raw.strip().upper()
        if value not in allowed:
            raise ValidationError(
                f"{name} must be one of {', '.join(allowed)}, got {raw!r}", name,
            )
        return value

    return normalize


_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_email(value: str) -> bool:
    return bool(_EMAIL.match(value))
