"""Common Schemas — base entity bodies and shared response models.

Invariants:
    - Every entity body carries id and created_at, both assigned by the service
    - Versioned bodies also carry version_id and updated_at
    - Unknown keys in request bodies are ignored, never stored

Design Decisions:
    - Server-assigned fields are optional on input so one model serves create,
      update, and storage (ADR: one wire representation per kind)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EntityBody(BaseModel):
    """Base for all stored entity bodies."""
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    created_at: datetime | None = None


class VersionedBody(EntityBody):
    """Base for versioned entity bodies."""
    version_id: str = ""
    updated_at: datetime | None = None
