"""Query Dispatcher — selects one filter and one retrieval mode, then reads the index.

Invariants:
    - Every supplied filter is validated before any store access, including
      filters that lose on precedence
    - Filter precedence is declaration order; the first non-empty filter wins
    - Mode precedence: SEARCH (non-empty search) > ALL (sorted, unbounded, or
      exhaustive filter) > PAGE
    - SEARCH and ALL ignore limit and offset; PAGE returns store order verbatim
    - ALL + sorted is a stable sort by display text; SEARCH output is always sorted

Design Decisions:
    - Filters are data (FilterSpec) so every entity kind shares this one dispatcher
    - Body listings (searchable=False) never search or sort: bodies have no
      single display text
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Sequence

from folio.core.cursor import Page
from folio.core.parameters import Normalizer, as_is
from folio.core.search import SearchQuery, filter_text_values, sort_by_text
from folio.store.table import IndexAccessor

logger = logging.getLogger(__name__)


class ListingMode(str, Enum):
    SEARCH = "search"
    ALL = "all"
    PAGE = "page"


@dataclass(frozen=True)
class FilterSpec:
    """One filter query parameter: its name, index partition accessor, and normalizer."""
    name: str
    accessor: Callable[[str], IndexAccessor]
    normalize: Normalizer = as_is
    exhaustive: bool = False


@dataclass(frozen=True)
class Selection:
    """The dispatcher's decision: which accessor to read, and how."""
    accessor: IndexAccessor | None
    filter_name: str | None = None
    filter_value: str | None = None
    exhaustive: bool = False


def select_filter(
    filters: Sequence[FilterSpec],
    supplied: Mapping[str, str | None],
    default: IndexAccessor | None,
) -> Selection:
    """Validate every supplied filter, then pick the first non-empty one."""
    normalized: dict[str, str] = {}
    for spec in filters:
        raw = supplied.get(spec.name)
        if raw:
            normalized[spec.name] = spec.normalize(spec.name, raw)
    for spec in filters:
        value = normalized.get(spec.name)
        if value:
            return Selection(
                accessor=spec.accessor(value),
                filter_name=spec.name,
                filter_value=value,
                exhaustive=spec.exhaustive,
            )
    return Selection(accessor=default)


def resolve_mode(
    query: SearchQuery,
    sorted_: bool,
    limit_supplied: bool,
    all_when_unbounded: bool,
    searchable: bool = True,
    exhaustive: bool = False,
) -> ListingMode:
    if searchable and not query.is_empty:
        return ListingMode.SEARCH
    if exhaustive:
        return ListingMode.ALL
    if searchable and (sorted_ or (not limit_supplied and all_when_unbounded)):
        return ListingMode.ALL
    return ListingMode.PAGE


class QueryDispatcher:
    """Invokes the selected accessor in the resolved mode."""

    async def dispatch(
        self,
        accessor: IndexAccessor,
        mode: ListingMode,
        page: Page,
        query: SearchQuery,
        sorted_: bool = False,
    ) -> list:
        if mode is ListingMode.SEARCH:
            return filter_text_values(await accessor.all(), query)
        if mode is ListingMode.ALL:
            items = await accessor.all()
            return sort_by_text(items) if sorted_ else items
        return await accessor.page(page)
