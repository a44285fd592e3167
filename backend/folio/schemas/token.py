"""Token Schemas — bearer tokens issued for a user by email/password grant.

Invariants:
    - The token ID is the bearer secret; tokens are readable until expires_at
"""

from datetime import datetime

from pydantic import BaseModel, Field

from folio.schemas.common import EntityBody


class Token(EntityBody):
    expires_at: datetime | None = None
    user_id: str = ""
    email: str = ""


class TokenRequest(BaseModel):
    """Password grant: exchange credentials for a new token."""
    grant_type: str = Field("password", pattern=r"^password$")
    username: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=1024)
