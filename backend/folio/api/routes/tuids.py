"""TUID Routes — mint fresh TUIDs and decode existing ones.

Invariants:
    - GET /tuids mints `limit` new TUIDs (default 5), in ascending order
    - GET /tuids/{id} on a malformed ID → 400, never 404
"""

from fastapi import APIRouter, Query, status

from folio.core import tuid
from folio.core.cursor import parse_limit
from folio.core.errors import ValidationError
from folio.schemas.tuid import TUIDInfoResponse

router = APIRouter(prefix="/api/v1", tags=["tuids"])

_DEFAULT_COUNT = 5


def _describe(value: str) -> TUIDInfoResponse:
    decoded = tuid.info(value)
    return TUIDInfoResponse(
        id=decoded.id, timestamp=decoded.timestamp, entropy=decoded.entropy,
    )


@router.post(
    "/tuids", status_code=status.HTTP_201_CREATED, response_model=TUIDInfoResponse,
)
async def create_tuid():
    return _describe(tuid.new_id())


@router.get("/tuids", response_model=list[TUIDInfoResponse])
async def list_tuids(limit: str | None = Query(None)):
    count = parse_limit(limit, _DEFAULT_COUNT)
    return [_describe(tuid.new_id()) for _ in range(count)]


@router.get("/tuids/{tuid_id}", response_model=TUIDInfoResponse)
async def read_tuid(tuid_id: str):
    if not tuid.is_valid(tuid_id):
        raise ValidationError(f"id must be a valid TUID, got {tuid_id!r}", "id")
    return _describe(tuid_id)
