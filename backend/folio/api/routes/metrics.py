"""Metric Routes — record, read, list, and aggregate numeric measurements.

Invariants:
    - Metrics are immutable once recorded: no PUT, no versions
    - /metric_stats needs one of entity, type, tag; from/to are yyyy-mm-dd, to exclusive
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.metric import Metric, MetricStatsResponse
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["metrics"])

_TYPE = EntityType.METRIC.value


@router.post("/metrics", status_code=status.HTTP_201_CREATED)
async def create_metric(
    body: Metric, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    async with services.audit.action("Recorded", _TYPE, request.url.path) as record:
        metric = await services.metrics.create(body)
        record.entity_id = metric.id
        if metric.entity_id:
            record.other_ids.append(metric.entity_id)
    set_location(request, response, metric.id)
    return metric


@router.get("/metrics")
async def list_metrics(
    params: ListingParams = Depends(listing_params),
    entity: str | None = Query(None),
    type_: str | None = Query(None, alias="type"),
    tag: str | None = Query(None),
    services: Services = Depends(get_services),
):
    return await services.metrics.listing(
        "metrics", params, {"entity": entity, "type": type_, "tag": tag},
    )


@router.get("/metrics/{metric_id}")
async def read_metric(metric_id: str, services: Services = Depends(get_services)):
    return await services.metrics.read(require_tuid(metric_id))


@router.head("/metrics/{metric_id}")
async def metric_exists(metric_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.metrics.exists(require_tuid(metric_id)))


@router.delete("/metrics/{metric_id}")
async def delete_metric(
    metric_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(metric_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        metric = await services.metrics.delete(metric_id)
        record.entity_id = metric.id
    return metric


@router.get("/metric_stats", response_model=MetricStatsResponse)
async def read_metric_stats(
    entity: str | None = Query(None),
    type_: str | None = Query(None, alias="type"),
    tag: str | None = Query(None),
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    services: Services = Depends(get_services),
):
    """Count, sum, min, max, mean, median, and std dev of matching metric values."""
    return await services.metrics.stats(
        entity=entity, entity_type=type_, tag=tag, from_date=from_, to_date=to,
    )


@router.get("/metric_labels")
async def list_metric_labels(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.metrics.listing("metric_labels", params)


@router.get("/metric_entity_ids")
async def list_metric_entity_ids(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.metrics.listing("metric_entity_ids", params)


@router.get("/metric_entity_types")
async def list_metric_entity_types(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.metrics.listing("metric_entity_types", params)


@router.get("/metric_tags")
async def list_metric_tags(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.metrics.listing("metric_tags", params)
