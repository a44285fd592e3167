"""Organization Routes — CRUD, version history, and organization listings."""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.organization import Organization
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["organizations"])

_TYPE = EntityType.ORGANIZATION.value


@router.post("/organizations", status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: Organization, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    async with services.audit.action("Created", _TYPE, request.url.path) as record:
        org = await services.organizations.create(body)
        record.entity_id = org.id
    set_location(request, response, org.id)
    return org


@router.get("/organizations")
async def list_organizations(
    params: ListingParams = Depends(listing_params),
    status_: str | None = Query(None, alias="status"),
    services: Services = Depends(get_services),
):
    return await services.organizations.listing(
        "organizations", params, {"status": status_},
    )


@router.get("/organizations/{org_id}")
async def read_organization(org_id: str, services: Services = Depends(get_services)):
    return await services.organizations.read(require_tuid(org_id))


@router.head("/organizations/{org_id}")
async def organization_exists(org_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.organizations.exists(require_tuid(org_id)))


@router.put("/organizations/{org_id}")
async def update_organization(
    org_id: str, body: Organization, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(org_id)
    async with services.audit.action("Updated", _TYPE, request.url.path) as record:
        org = await services.organizations.update(org_id, body)
        record.entity_id = org.id
    return org


@router.delete("/organizations/{org_id}")
async def delete_organization(
    org_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(org_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        org = await services.organizations.delete(org_id)
        record.entity_id = org.id
    return org


@router.get("/organizations/{org_id}/versions")
async def list_organization_versions(
    org_id: str,
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.organizations.versions(require_tuid(org_id), params)


@router.get("/organizations/{org_id}/versions/{version_id}")
async def read_organization_version(
    org_id: str, version_id: str, services: Services = Depends(get_services),
):
    return await services.organizations.read_version(
        require_tuid(org_id), require_tuid(version_id, "version_id"),
    )


@router.head("/organizations/{org_id}/versions/{version_id}")
async def organization_version_exists(
    org_id: str, version_id: str, services: Services = Depends(get_services),
):
    return exists_response(await services.organizations.version_exists(
        require_tuid(org_id), require_tuid(version_id, "version_id"),
    ))


@router.delete("/organizations/{org_id}/versions/{version_id}")
async def delete_organization_version(
    org_id: str, version_id: str, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(org_id)
    require_tuid(version_id, "version_id")
    async with services.audit.action("Deleted version of", _TYPE, request.url.path) as record:
        org = await services.organizations.delete_version(org_id, version_id)
        record.entity_id = org.id
    return org


@router.get("/organization_names")
async def list_organization_names(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.organizations.listing("organization_names", params)


@router.get("/organization_statuses")
async def list_organization_statuses(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.organizations.listing("organization_statuses", params)
