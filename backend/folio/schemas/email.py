"""Email Schemas — stored outbound messages. Delivery is handled elsewhere."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folio.core.domain_types import EmailStatus
from folio.schemas.common import VersionedBody


class Identity(BaseModel):
    name: str = ""
    address: str = ""

    @field_validator("address")
    @classmethod
    def standardize_address(cls, v: str) -> str:
        return v.strip().lower()

    def __str__(self) -> str:
        return f"{self.name} <{self.address}>" if self.name else self.address


class Email(VersionedBody):
    from_: Identity = Field(default_factory=Identity, alias="from")
    to: list[Identity] = Field(default_factory=list)
    cc: list[Identity] = Field(default_factory=list)
    bcc: list[Identity] = Field(default_factory=list)
    subject: str = ""
    body_text: str = ""
    body_html: str = ""
    status: EmailStatus = EmailStatus.PENDING

    model_config = ConfigDict(populate_by_name=True)

    def addresses(self) -> list[str]:
        people = [self.from_, *self.to, *self.cc, *self.bcc]
        return [p.address for p in people if p.address]
