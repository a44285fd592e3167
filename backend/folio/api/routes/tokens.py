"""Token Routes — issue by password grant, read, revoke, and list by user.

Invariants:
    - Bad credentials and disabled accounts → 401, no token created
    - Expired tokens read as 404
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import get_services, listing_params, require_tuid, set_location
from folio.core.domain_types import EntityType
from folio.schemas.token import TokenRequest
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["tokens"])

_TYPE = EntityType.TOKEN.value


@router.post("/tokens", status_code=status.HTTP_201_CREATED)
async def create_token(
    body: TokenRequest, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    async with services.audit.action("Issued", _TYPE, request.url.path) as record:
        token = await services.tokens.issue(body)
        record.entity_id = token.id
        record.user_id = token.user_id
    set_location(request, response, token.id)
    return token


@router.get("/tokens")
async def list_tokens(
    params: ListingParams = Depends(listing_params),
    user: str | None = Query(None),
    services: Services = Depends(get_services),
):
    return await services.tokens.listing("tokens", params, {"user": user})


@router.get("/tokens/{token_id}")
async def read_token(token_id: str, services: Services = Depends(get_services)):
    return await services.tokens.read(require_tuid(token_id))


@router.delete("/tokens/{token_id}")
async def delete_token(
    token_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(token_id)
    async with services.audit.action("Revoked", _TYPE, request.url.path) as record:
        token = await services.tokens.delete(token_id)
        record.entity_id = token.id
        record.user_id = token.user_id
    return token


@router.get("/token_user_ids")
async def list_token_user_ids(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    """User IDs holding tokens, paired with the user's email."""
    return await services.tokens.listing("token_user_ids", params)
