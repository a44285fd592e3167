"""Content Routes — CRUD, version history, and title/type/author/tag listings.

Invariants:
    - Path IDs are validated as TUIDs before any store access (400)
    - POST returns 201 with a Location header; DELETE returns the deleted body
    - Mutations are audited through services.audit.action

Design Decisions:
    - content_titles filters are mutually exclusive by precedence
      (type > author > editor > tag); extra filters are validated, then ignored
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from folio.api.dependencies import (
    exists_response, get_services, listing_params, require_tuid, set_location,
)
from folio.core.domain_types import EntityType
from folio.schemas.content import Content
from folio.services.listing import ListingParams
from folio.services.registry import Services

router = APIRouter(prefix="/api/v1", tags=["contents"])

_TYPE = EntityType.CONTENT.value


@router.post("/contents", status_code=status.HTTP_201_CREATED)
async def create_content(
    body: Content, request: Request, response: Response,
    services: Services = Depends(get_services),
):
    """Create new content; id, version, timestamps, and counts are assigned."""
    async with services.audit.action("Created", _TYPE, request.url.path) as record:
        content = await services.contents.create(body)
        record.entity_id = content.id
    set_location(request, response, content.id)
    return content


@router.get("/contents")
async def list_contents(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    """Full content bodies, one page at a time (default 20)."""
    return await services.contents.listing("contents", params)


@router.get("/contents/{content_id}")
async def read_content(content_id: str, services: Services = Depends(get_services)):
    return await services.contents.read(require_tuid(content_id))


@router.head("/contents/{content_id}")
async def content_exists(content_id: str, services: Services = Depends(get_services)):
    return exists_response(await services.contents.exists(require_tuid(content_id)))


@router.put("/contents/{content_id}")
async def update_content(
    content_id: str, body: Content, request: Request,
    services: Services = Depends(get_services),
):
    require_tuid(content_id)
    async with services.audit.action("Updated", _TYPE, request.url.path) as record:
        content = await services.contents.update(content_id, body)
        record.entity_id = content.id
    return content


@router.delete("/contents/{content_id}")
async def delete_content(
    content_id: str, request: Request, services: Services = Depends(get_services),
):
    require_tuid(content_id)
    async with services.audit.action("Deleted", _TYPE, request.url.path) as record:
        content = await services.contents.delete(content_id)
        record.entity_id = content.id
    return content


@router.get("/contents/{content_id}/versions")
async def list_content_versions(
    content_id: str,
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.contents.versions(require_tuid(content_id), params)


@router.get("/contents/{content_id}/versions/{version_id}")
async def read_content_version(
    content_id: str, version_id: str, services: Services = Depends(get_services),
):
    return await services.contents.read_version(
        require_tuid(content_id), require_tuid(version_id, "version_id"),
    )


@router.head("/contents/{content_id}/versions/{version_id}")
async def content_version_exists(
    content_id: str, version_id: str, services: Services = Depends(get_services),
):
    return exists_response(await services.contents.version_exists(
        require_tuid(content_id), require_tuid(version_id, "version_id"),
    ))


# ─── LISTINGS ───────────────────────────────────────────────────

@router.get("/content_titles")
async def list_content_titles(
    params: ListingParams = Depends(listing_params),
    type_: str | None = Query(None, alias="type"),
    author: str | None = Query(None),
    editor: str | None = Query(None),
    tag: str | None = Query(None),
    services: Services = Depends(get_services),
):
    """Content IDs and titles, filtered by type, author, editor ID, or tag."""
    return await services.contents.listing(
        "content_titles", params,
        {"type": type_, "author": author, "editor": editor, "tag": tag},
    )


@router.get("/content_types")
async def list_content_types(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.contents.listing("content_types", params)


@router.get("/content_authors")
async def list_content_authors(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.contents.listing("content_authors", params)


@router.get("/content_tags")
async def list_content_tags(
    params: ListingParams = Depends(listing_params),
    services: Services = Depends(get_services),
):
    return await services.contents.listing("content_tags", params)
