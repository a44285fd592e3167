"""Device Schemas — client devices identified by their User-Agent header."""

from datetime import datetime

from folio.schemas.common import VersionedBody


class Device(VersionedBody):
    last_seen_at: datetime | None = None
    expires_at: datetime | None = None
    user_id: str = ""
    user_agent: str = ""

    def last_seen_on(self) -> str:
        return self.last_seen_at.strftime("%Y-%m-%d") if self.last_seen_at else ""
