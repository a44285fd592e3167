"""Email Routes — CRUD, version history, and address/status listings."""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.email import Email
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["emails"])

_TYPE = EntityType.EMAIL.value


@router.post("/emails", status_code=status.HTTP_201_CREATED)
async def create_email(
    body: Email, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    """Store an email message. Delivery is not attempted."""
    async with services.audit.action("Created", _TYPE, request.url.path) as record:
        email = await services.emails.create(body)
        record.entity_id = email.id
    set_location(request, response, email.id)
    return email


@router.get("/emails")
async def list_emails(
    params: ListingParams = Depends(listing_params),
    address: str | None = Query(None),
    status_: str | None = Query(None, alias="status"),
    services: Services = Depends(get_services),
):
    return await services.emails.listing(
        "emails", params, {"address": address, "status": status_},
    )


@router.get("/emails/{email_id}")
async def read_email(email_id: str, services: Services = Depends(get_services)):
    return await services.emails.read(require_tuid(email_id))


@router.head("/emails/{email_id}")
async def email_exists(email_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.emails.exists(require_tuid(email_id)))


@router.put("/emails/{email_id}")
async def update_email(
    email_id: str, body: Email, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(email_id)
    async with services.audit.action("Updated", _TYPE, request.url.path) as record:
        email = await services.emails.update(email_id, body)
        record.entity_id = email.id
    return email


@router.delete("/emails/{email_id}")
async def delete_email(
    email_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(email_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        email = await services.emails.delete(email_id)
        record.entity_id = email.id
    return email


@router.get("/emails/{email_id}/versions")
async def list_email_versions(
    email_id: str,
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.emails.versions(require_tuid(email_id), params)


@router.get("/emails/{email_id}/versions/{version_id}")
async def read_email_version(
    email_id: str, version_id: str, services: Services = Depends(get_services),
):
    return await services.emails.read_version(
        require_tuid(email_id), require_tuid(version_id, "version_id"),
    )


@router.head("/emails/{email_id}/versions/{version_id}")
async def email_version_exists(
    email_id: str, version_id: str, services: Services = Depends(get_services),
):
    return exists_response(await services.emails.version_exists(
        require_tuid(email_id), require_tuid(version_id, "version_id"),
    ))


@router.get("/email_addresses")
async def list_email_addresses(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.emails.listing("email_addresses", params)


@router.get("/email_statuses")
async def list_email_statuses(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.emails.listing("email_statuses", params)
