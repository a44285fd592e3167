"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId wraps a TUID string — lexicographic order equals creation order
    - All valid states encoded as Enums — no raw string matching
    - TextValue serializes as {"id": ..., "value": ...}

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders; values are the wire values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", str)
VersionId = NewType("VersionId", str)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TextValue:
    """An entity ID paired with its human-readable, searchable display text."""
    id: str
    value: str

    def __str__(self) -> str:
        return f"{self.id}: {self.value}"


# ─── Enums ───────────────────────────────────────────────────────

class EntityType(str, Enum):
    """Entity kinds stored in the versioned table — maps to `entity_type` columns."""
    CONTENT = "Content"
    USER = "User"
    ORGANIZATION = "Organization"
    EMAIL = "Email"
    DEVICE = "Device"
    TOKEN = "Token"
    METRIC = "Metric"
    EVENT = "Event"


class ContentType(str, Enum):
    BOOK = "BOOK"
    CHAPTER = "CHAPTER"
    ARTICLE = "ARTICLE"
    CATEGORY = "CATEGORY"


class Status(str, Enum):
    """User and organization lifecycle status."""
    PENDING = "PENDING"
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class EmailStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    UNSENT = "UNSENT"
    ERROR = "ERROR"


class LogLevel(str, Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"
