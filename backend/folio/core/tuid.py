"""TUID — time-ordered unique identifiers for every entity and version.

A TUID is 16 base-62 characters (0-9A-Za-z, ASCII order): 11 characters of
zero-padded nanoseconds since the Unix epoch, followed by 5 random characters.

Invariants:
    - Lexicographic order of TUIDs equals their timestamp order
    - new_id() is strictly monotonic within a process, even within one clock tick
    - "-" sorts before every TUID and "|" after every TUID (cursor sentinels)
    - first_id_with_time(t) is the smallest TUID for instant t (entropy "00000")

Design Decisions:
    - Nanosecond timestamp over ms + counter: collisions need the same ns AND entropy
    - Module-level generator guarded by threading.Lock: generation is called from
      the event loop and from worker threads alike
"""

import secrets
import threading
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
TIME_LENGTH = 11
ENTROPY_LENGTH = 5
TUID_LENGTH = TIME_LENGTH + ENTROPY_LENGTH

_BASE = len(ALPHABET)
_INDEX = {c: i for i, c in enumerate(ALPHABET)}
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class TUIDInfo:
    """Decoded TUID: its creation timestamp and random entropy suffix."""
    id: str
    timestamp: datetime
    entropy: str


def _encode(value: int, width: int) -> str:
    chars = []
    while value > 0:
        value, rem = divmod(value, _BASE)
        chars.append(ALPHABET[rem])
    return "".join(reversed(chars)).rjust(width, ALPHABET[0])


def _decode(text: str) -> int:
    value = 0
    for c in text:
        value = value * _BASE + _INDEX[c]
    return value


def _to_nanos(t: datetime) -> int:
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    delta = t - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000


def _from_nanos(nanos: int) -> datetime:
    seconds, rem = divmod(nanos, 1_000_000_000)
    return _EPOCH + timedelta(seconds=seconds, microseconds=rem // 1_000)


class _Generator:
    """Monotonic TUID source: never reissues a timestamp at or below the last one."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def next_id(self, now: datetime | None = None) -> str:
        nanos = _to_nanos(now or datetime.now(timezone.utc))
        with self._lock:
            if nanos <= self._last:
                nanos = self._last + 1
            self._last = nanos
        entropy = "".join(secrets.choice(ALPHABET) for _ in range(ENTROPY_LENGTH))
        return _encode(nanos, TIME_LENGTH) + entropy


_generator = _Generator()


def new_id(now: datetime | None = None) -> str:
    """Generate a new TUID for `now` (default: current UTC time)."""
    return _generator.next_id(now)


def is_valid(value: str | None) -> bool:
    """True when value has TUID shape (length and alphabet)."""
    if not value or len(value) != TUID_LENGTH:
        return False
    return all(c in _INDEX for c in value)


def info(value: str) -> TUIDInfo:
    """Decode a TUID. Raises ValueError for malformed input."""
    if not is_valid(value):
        raise ValueError(f"invalid TUID: {value!r}")
    nanos = _decode(value[:TIME_LENGTH])
    return TUIDInfo(id=value, timestamp=_from_nanos(nanos), entropy=value[TIME_LENGTH:])


def first_id_with_time(t: datetime) -> str:
    """Smallest TUID that could have been generated at instant t."""
    return _encode(_to_nanos(t), TIME_LENGTH) + ALPHABET[0] * ENTROPY_LENGTH


def date_range_ids(start: date | None, end: date | None) -> tuple[str | None, str | None]:
    """ID bounds for a date range: start inclusive, end exclusive. None = unbounded."""
    start_id = end_id = None
    if start is not None:
        start_id = first_id_with_time(datetime.combine(start, time.min, timezone.utc))
    if end is not None:
        end_id = first_id_with_time(datetime.combine(end, time.min, timezone.utc))
    return start_id, end_id
