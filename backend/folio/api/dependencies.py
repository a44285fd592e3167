"""API Dependencies — services injection, listing parameters, and small route helpers.

Invariants:
    - Handlers reach services only through get_services (app.state.services)
    - Listing parameters arrive as raw strings; parsing happens in the listing
      engine so errors name the offending parameter
"""

from fastapi import Query, Request, Response, status

from folio.core import tuid
from folio.core.errors import ValidationError
from folio.services.listing import ListingParams
from folio.services.registry import Services


def get_services(request: Request) -> Services:
    """FastAPI dependency for the application's Services container."""
    return request.app.state.services


def listing_params(
    reverse: str | None = Query(None, description="Newest first when true"),
    limit: str | None = Query(None, description="Page size; omitted means all where supported"),
    offset: str | None = Query(None, description="Exclusive start cursor (an ID or key)"),
    sorted_: str | None = Query(None, alias="sorted", description="Sort by display text"),
    search: str | None = Query(None, description="Whitespace-separated search terms"),
    any_: str | None = Query(None, alias="any", description="Match any term instead of all"),
) -> ListingParams:
    return ListingParams(
        reverse=reverse, limit=limit, offset=offset,
        sorted=sorted_, search=search, any=any_,
    )


def require_tuid(value: str, name: str = "id") -> str:
    if not tuid.is_valid(value):
        raise ValidationError(f"{name} must be a valid TUID, got {value!r}", name)
    return value


def exists_response(found: bool) -> Response:
    """HEAD result: 204 when the entity exists, 404 otherwise."""
    return Response(
        status_code=status.HTTP_204_NO_CONTENT if found else status.HTTP_404_NOT_FOUND,
    )


def set_location(request: Request, response: Response, entity_id: str) -> None:
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{entity_id}"
