"""User Routes — CRUD, version history, and user listings.

Invariants:
    - Responses never contain password or password_hash
    - Deleting a user revokes all of the user's tokens first; a failed revoke
      leaves the user in place
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.user import User
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["users"])

_TYPE = EntityType.USER.value


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: User, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    async with services.audit.action("Created", _TYPE, request.url.path) as record:
        user = await services.users.create(body)
        record.entity_id = user.id
    set_location(request, response, user.id)
    return services.users.present(user)


@router.get("/users")
async def list_users(
    params: ListingParams = Depends(listing_params),
    email: str | None = Query(None),
    org: str | None = Query(None),
    role: str | None = Query(None),
    status_: str | None = Query(None, alias="status"),
    services: Services = Depends(get_services),
):
    """Users filtered by email > org > role > status, or all users paged."""
    return await services.users.listing(
        "users", params,
        {"email": email, "org": org, "role": role, "status": status_},
    )


@router.get("/users/{user_id}")
async def read_user(user_id: str, services: Services = Depends(get_services)):
    user = await services.users.read(require_tuid(user_id))
    return services.users.present(user)


@router.head("/users/{user_id}")
async def user_exists(user_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.users.exists(require_tuid(user_id)))


@router.put("/users/{user_id}")
async def update_user(
    user_id: str, body: User, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(user_id)
    async with services.audit.action("Updated", _TYPE, request.url.path) as record:
        user = await services.users.update(user_id, body)
        record.entity_id = user.id
    return services.users.present(user)


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(user_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        await services.tokens.delete_for_user(user_id)
        user = await services.users.delete(user_id)
        record.entity_id = user.id
    return services.users.present(user)


@router.get("/users/{user_id}/versions")
async def list_user_versions(
    user_id: str,
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.users.versions(require_tuid(user_id), params)


@router.get("/users/{user_id}/versions/{version_id}")
async def read_user_version(
    user_id: str, version_id: str, services: Services = Depends(get_services),
):
    user = await services.users.read_version(
        require_tuid(user_id), require_tuid(version_id, "version_id"),
    )
    return services.users.present(user)


@router.head("/users/{user_id}/versions/{version_id}")
async def user_version_exists(
    user_id: str, version_id: str, services: Services = Depends(get_services),
):
    return exists_response(await services.users.version_exists(
        require_tuid(user_id), require_tuid(version_id, "version_id"),
    ))


@router.delete("/users/{user_id}/versions/{version_id}")
async def delete_user_version(
    user_id: str, version_id: str, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(user_id)
    require_tuid(version_id, "version_id")
    async with services.audit.action("Deleted version of", _TYPE, request.url.path) as record:
        user = await services.users.delete_version(user_id, version_id)
        record.entity_id = user.id
    return services.users.present(user)


# ─── LISTINGS ───────────────────────────────────────────────────

@router.get("/user_names")
async def list_user_names(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.users.listing("user_names", params)


@router.get("/user_emails")
async def list_user_emails(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.users.listing("user_emails", params)


@router.get("/user_orgs")
async def list_user_orgs(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    """Organization IDs with members, paired with organization names."""
    return await services.users.listing("user_orgs", params)


@router.get("/user_roles")
async def list_user_roles(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.users.listing("user_roles", params)


@router.get("/user_statuses")
async def list_user_statuses(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.users.listing("user_statuses", params)
