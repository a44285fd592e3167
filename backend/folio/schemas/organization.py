"""Organization Schemas."""

from pydantic import field_validator

from folio.core.domain_types import Status
from folio.schemas.common import VersionedBody


class Organization(VersionedBody):
    name: str = ""
    status: Status = Status.PENDING

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()
