"""Cursor Codec — pagination cursors, direction-aware sentinels, and page parameters.

Invariants:
    - Cursors are exclusive: a page starts strictly after (or before, reversed) its offset
    - Absent offset resolves to MIN_CURSOR forward, MAX_CURSOR reversed
    - A sentinel offset places no bound on that side of the page
    - Parse errors are ValidationError naming the offending query parameter

Design Decisions:
    - "-" and "|" as sentinels: they sort before "0" and after "z" in ASCII,
      so they bracket every TUID and every printable index key
    - Page is a frozen dataclass: one per request, never mutated
"""

import re
from dataclasses import dataclass

from folio.core.errors import ValidationError

MIN_CURSOR = "-"
MAX_CURSOR = "|"

_INTEGER = re.compile(r"[+-]?[0-9]+")

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class Page:
    """One page request: direction, size (None = unbounded), exclusive start cursor."""
    reverse: bool = False
    limit: int | None = None
    offset: str = MIN_CURSOR

    @property
    def bounded(self) -> bool:
        """True when the offset is a real cursor rather than a sentinel."""
        return self.offset not in (MIN_CURSOR, MAX_CURSOR)


def resolve_offset(reverse: bool, offset: str | None) -> str:
    """Empty offset → direction sentinel; anything else passes through unchanged."""
    if not offset:
        return MAX_CURSOR if reverse else MIN_CURSOR
    return offset


def parse_limit(value: str | None, default: int, name: str = "limit") -> int:
    """Parse a positive decimal integer; absent → default; 0, negative, or garbage → ValidationError."""
    if value is None or value == "":
        return default
    if not _INTEGER.fullmatch(value) or int(value) < 1:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}", name)
    return int(value)


def parse_bool(value: str | None, default: bool, name: str) -> bool:
    """Parse 1/t/true or 0/f/false (case variants as listed); absent → default."""
    if value is None or value == "":
        return default
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValidationError(f"{name} must be a boolean, got {value!r}", name)


def build_page(
    reverse: str | None, limit: str | None, offset: str | None,
    default_limit: int, default_reverse: bool = False,
) -> Page:
    """Build a Page from raw query strings."""
    rev = parse_bool(reverse, default_reverse, "reverse")
    return Page(
        reverse=rev,
        limit=parse_limit(limit, default_limit),
        offset=resolve_offset(rev, offset),
    )
