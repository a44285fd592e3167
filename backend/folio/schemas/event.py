"""Event Schemas — audit and log events, optionally tied to a user and entity."""

from datetime import datetime

from pydantic import Field

from folio.core.domain_types import LogLevel
from folio.schemas.common import EntityBody


class Event(EntityBody):
    expires_at: datetime | None = None
    user_id: str = ""
    entity_id: str = ""
    entity_type: str = ""
    other_ids: list[str] = Field(default_factory=list)
    log_level: LogLevel = LogLevel.INFO
    message: str = ""
    uri: str = ""

    def ids(self) -> list[str]:
        """Every entity ID this event refers to."""
        return [i for i in (self.user_id, self.entity_id, *self.other_ids) if i]

    def created_on(self) -> str:
        return self.created_at.strftime("%Y-%m-%d") if self.created_at else ""
