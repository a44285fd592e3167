"""Event Routes — log events, newest first by default.

Invariants:
    - Posting an event is not itself audited
    - Events expire after the configured retention and then read as 404
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.schemas.event import Event
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["events"])


@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: Event, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    event = await services.events.create(body)
    set_location(request, response, event.id)
    return event


@router.get("/events")
async def list_events(
    params: ListingParams = Depends(listing_params),
    entity: str | None = Query(None),
    type_: str | None = Query(None, alias="type"),
    log_level: str | None = Query(None),
    date: str | None = Query(None),
    services: Services = Depends(get_services),
):
    """Events filtered by referenced ID, entity type, log level, or day."""
    return await services.events.listing(
        "events", params,
        {"entity": entity, "type": type_, "log_level": log_level, "date": date},
    )


@router.get("/events/{event_id}")
async def read_event(event_id: str, services: Services = Depends(get_services)):
    return await services.events.read(require_tuid(event_id))


@router.head("/events/{event_id}")
async def event_exists(event_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.events.exists(require_tuid(event_id)))


@router.delete("/events/{event_id}")
async def delete_event(event_id: str, services: Services = Depends(get_services)):
    return await services.events.delete(require_tuid(event_id))


@router.get("/event_entity_ids")
async def list_event_entity_ids(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.events.listing("event_entity_ids", params)


@router.get("/event_entity_types")
async def list_event_entity_types(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.events.listing("event_entity_types", params)


@router.get("/event_log_levels")
async def list_event_log_levels(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.events.listing("event_log_levels", params)


@router.get("/event_dates")
async def list_event_dates(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.events.listing("event_dates", params)
