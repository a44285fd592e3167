"""Device Routes — devices registered from the User-Agent header.

Invariants:
    - POST builds the device from the request's User-Agent header; the optional
      body only links it to a user
    - PUT refreshes last-seen and expiry
"""

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status
from pydantic import BaseModel

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.device import Device
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["devices"])

_TYPE = EntityType.DEVICE.value


class DeviceRegistration(BaseModel):
    user_id: str = ""


@router.post("/devices", status_code=status.HTTP_201_CREATED)
async def create_device(
    request: Request,
    response: Response,
    body: DeviceRegistration | None = None,
    user_agent: str = Header(""),
    services: Services = Depends(get_services),
):
    async with services.audit.action("Created", _TYPE, request.url.path) as record:
        device = await services.devices.register(
            user_agent, body.user_id if body else "",
        )
        record.entity_id = device.id
        record.user_id = device.user_id
    set_location(request, response, device.id)
    return device


@router.get("/devices")
async def list_devices(
    params: ListingParams = Depends(listing_params),
    user: str | None = Query(None),
    date: str | None = Query(None),
    services: Services = Depends(get_services),
):
    """Devices filtered by user ID or last-seen date (yyyy-mm-dd)."""
    return await services.devices.listing(
        "devices", params, {"user": user, "date": date},
    )


@router.get("/devices/{device_id}")
async def read_device(device_id: str, services: Services = Depends(get_services)):
    return await services.devices.read(require_tuid(device_id))


@router.head("/devices/{device_id}")
async def device_exists(device_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.devices.exists(require_tuid(device_id)))


@router.put("/devices/{device_id}")
async def update_device(
    device_id: str, body: Device, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(device_id)
    async with services.audit.action("Updated", _TYPE, request.url.path) as record:
        device = await services.devices.update(device_id, body)
        record.entity_id = device.id
    return device


@router.delete("/devices/{device_id}")
async def delete_device(
    device_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(device_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        device = await services.devices.delete(device_id)
        record.entity_id = device.id
    return device


@router.get("/devices/{device_id}/versions")
async def list_device_versions(
    device_id: str,
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.devices.versions(require_tuid(device_id), params)


@router.get("/devices/{device_id}/versions/{version_id}")
async def read_device_version(
    device_id: str, version_id: str, services: Services = Depends(get_services),
):
    return await services.devices.read_version(
        require_tuid(device_id), require_tuid(version_id, "version_id"),
    )


@router.head("/devices/{device_id}/versions/{version_id}")
async def device_version_exists(
    device_id: str, version_id: str, services: Services = Depends(get_services),
):
    return exists_response(await services.devices.version_exists(
        require_tuid(device_id), require_tuid(version_id, "version_id"),
    ))


@router.delete("/devices/{device_id}/versions/{version_id}")
async def delete_device_version(
    device_id: str, version_id: str, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(device_id)
    require_tuid(version_id, "version_id")
    async with services.audit.action("Deleted version of", _TYPE, request.url.path) as record:
        device = await services.devices.delete_version(device_id, version_id)
        record.entity_id = device.id
    return device


@router.get("/device_agents")
async def list_device_agents(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.devices.listing("device_agents", params)


@router.get("/device_user_ids")
async def list_device_user_ids(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.devices.listing("device_user_ids", params)


@router.get("/device_dates")
async def list_device_dates(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.devices.listing("device_dates", params)
