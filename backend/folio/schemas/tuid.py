"""TUID Schemas."""

from datetime import datetime

from pydantic import BaseModel


class TUIDInfoResponse(BaseModel):
    id: str
    timestamp: datetime
    entropy: str
