"""Metric Schemas — numeric measurements attached to an entity or entity type."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from folio.schemas.common import EntityBody


class Metric(EntityBody):
    expires_at: datetime | None = None
    title: str = ""
    label: str = ""
    entity_id: str = ""
    entity_type: str = ""
    tags: list[str] = Field(default_factory=list)
    value: float = 0.0
    units: str = ""

    @field_validator("tags")
    @classmethod
    def standardize_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(t.strip().lower() for t in v if t.strip()))

    def description(self) -> str:
        """Human-readable one-liner, e.g. 'Page Load: 1.5 s for Content 0Ab...'."""
        text = f"{self.title}: {self.value:g} {self.units}".rstrip()
        target = " ".join(p for p in (self.entity_type, self.entity_id) if p)
        if target:
            text += f" for {target}"
        if self.label:
            text += f" ({self.label})"
        return text


class MetricStatsResponse(BaseModel):
    entity_id: str = ""
    entity_type: str = ""
    tag: str = ""
    count: int = 0
    sum: float | None = None
    min: float | None = None
    max: float | None = None
    mean: float | None = None
    median: float | None = None
    std_dev: float | None = None
    from_time: datetime | None = None
    to_time: datetime | None = None
