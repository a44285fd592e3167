"""User Schemas — accounts with hashed passwords, roles, and organization membership.

Invariants:
    - email is stored trimmed and lower-cased
    - roles are lower-cased and de-duplicated
    - password is write-only: hashed by the service, never stored or returned in clear
    - public() never includes password or password_hash
"""

from pydantic import Field, field_validator

from folio.core.domain_types import Status
from folio.schemas.common import VersionedBody


class User(VersionedBody):
    given_name: str = ""
    family_name: str = ""
    email: str = ""
    password: str = ""
    password_hash: str = ""
    roles: list[str] = Field(default_factory=list)
    org_id: str = ""
    org_name: str = ""
    avatar_url: str = ""
    website_url: str = ""
    status: Status = Status.PENDING

    @field_validator("email")
    @classmethod
    def standardize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("roles")
    @classmethod
    def standardize_roles(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(r.strip().lower() for r in v if r.strip()))

    def full_name(self) -> str:
        return " ".join(n for n in (self.given_name, self.family_name) if n)

    def label(self) -> str:
        name = self.full_name()
        return f"{name} <{self.email}>" if name else self.email

    def public(self) -> dict:
        return self.model_dump(mode="json", exclude={"password", "password_hash"})
