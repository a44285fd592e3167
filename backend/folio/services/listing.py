"""Listing Engine — one generic listing pipeline configured per endpoint by a ListingSpec.

Pipeline: parse paging/search params → select filter → resolve mode → read index
→ (ID accessor) fan out to bodies, dropping missing slots → present.

Invariants:
    - Parameter and filter validation completes before any store access
    - Whole listing runs under the configured timeout; on expiry the in-flight
      reads are cancelled and ListingTimeoutError (504) is raised, never a partial list
    - Missing fan-out slots are dropped silently

Design Decisions:
    - Builder over per-kind handler code: each endpoint is a declaration of
      filters + default accessor + result shape (ADR: no per-kind dispatch copies)
    - absent limit means "everything" for text-value and plain-value listings, and
      one default-sized page for body listings (all_when_unbounded)
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from folio.core.cursor import build_page, parse_bool
from folio.core.errors import ListingTimeoutError
from folio.core.parameters import Normalizer, as_is
from folio.core.search import compile_query
from folio.services.fan_out import FanOutRetriever, present
from folio.services.query_dispatch import (
    FilterSpec, QueryDispatcher, resolve_mode, select_filter,
)
from folio.store.table import IndexAccessor

logger = logging.getLogger(__name__)


class ResultShape(str, Enum):
    TEXT_VALUES = "text_values"
    VALUES = "values"
    BODIES = "bodies"


@dataclass(frozen=True)
class ListingParams:
    """Raw listing query parameters, exactly as received."""
    reverse: str | None = None
    limit: str | None = None
    offset: str | None = None
    sorted: str | None = None
    search: str | None = None
    any: str | None = None


@dataclass(frozen=True)
class ListingSpec:
    name: str
    shape: ResultShape
    default: IndexAccessor
    filters: tuple[FilterSpec, ...] = ()
    default_limit: int = 100
    newest_first: bool = False
    all_when_unbounded: bool = True
    present: Callable[[Any], Any] | None = None


class ListingBuilder:
    """Fluent construction of a ListingSpec; filters are kept in declaration order."""

    def __init__(self, name: str, shape: ResultShape):
        self._name = name
        self._shape = shape
        self._filters: list[FilterSpec] = []
        self._default: IndexAccessor | None = None
        self._default_limit = 100 if shape is ResultShape.BODIES else 1000
        self._newest_first = False
        self._all_when_unbounded = shape is not ResultShape.BODIES
        self._present: Callable[[Any], Any] | None = None

    def filter(
        self,
        name: str,
        accessor: Callable[[str], IndexAccessor],
        normalize: Normalizer = as_is,
        exhaustive: bool = False,
    ) -> "ListingBuilder":
        self._filters.append(FilterSpec(name, accessor, normalize, exhaustive))
        return self

    def otherwise(self, accessor: IndexAccessor) -> "ListingBuilder":
        self._default = accessor
        return self

    def default_limit(self, limit: int) -> "ListingBuilder":
        self._default_limit = limit
        return self

    def newest_first(self) -> "ListingBuilder":
        self._newest_first = True
        return self

    def present(self, fn: Callable[[Any], Any]) -> "ListingBuilder":
        self._present = fn
        return self

    def build(self) -> ListingSpec:
        if self._default is None:
            raise ValueError(f"listing {self._name!r} has no default accessor")
        return ListingSpec(
            name=self._name,
            shape=self._shape,
            default=self._default,
            filters=tuple(self._filters),
            default_limit=self._default_limit,
            newest_first=self._newest_first,
            all_when_unbounded=self._all_when_unbounded,
            present=self._present,
        )


class ListingEngine:
    """Runs any ListingSpec against its indexes."""

    def __init__(self, max_workers: int = 32, timeout_seconds: float = 30.0):
        self._dispatcher = QueryDispatcher()
        self._max_workers = max_workers
        self._timeout = timeout_seconds

    async def run(
        self,
        spec: ListingSpec,
        params: ListingParams,
        filters: Mapping[str, str | None] | None = None,
    ) -> list:
        page = build_page(
            params.reverse, params.limit, params.offset,
            spec.default_limit, spec.newest_first,
        )
        searchable = spec.shape is not ResultShape.BODIES
        sorted_ = parse_bool(params.sorted, False, "sorted") and searchable
        query = compile_query(params.search, parse_bool(params.any, False, "any"))
        selection = select_filter(spec.filters, filters or {}, spec.default)
        mode = resolve_mode(
            query, sorted_, bool(params.limit), spec.all_when_unbounded,
            searchable, selection.exhaustive,
        )
        logger.debug(
            f"Listing {spec.name} by {selection.filter_name or 'default'}",
            extra={"listing": spec.name, "mode": mode.value},
        )

        async def execute() -> list:
            items = await self._dispatcher.dispatch(
                selection.accessor, mode, page, query, sorted_,
            )
            if selection.accessor.yields_ids:
                retriever = FanOutRetriever(selection.accessor.fetch, self._max_workers)
                items = present(await retriever.fetch_all(items))
            if spec.present is not None:
                items = [spec.present(item) for item in items]
            return items

        try:
            return await asyncio.wait_for(execute(), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Listing {spec.name} timed out after {self._timeout}s",
                extra={"listing": spec.name},
            )
            raise ListingTimeoutError(spec.name, self._timeout)
