"""Search Matcher — token-based substring search over already-fetched display text.

Invariants:
    - Terms are lowercase, non-empty, unique, in first-occurrence order
    - An empty SearchQuery matches every candidate
    - match_any=True: any term is a substring; match_any=False: all terms are
    - filter_text_values output is stably sorted by display text (ordinal)

Design Decisions:
    - Client-side matching: the store has no full-text search, and listings that
      search always read the whole index partition first
    - Pure functions over frozen dataclass: no IO, trivially testable
"""

from dataclasses import dataclass
from typing import Iterable, TypeVar

from folio.core.domain_types import TextValue

T = TypeVar("T", TextValue, str)


@dataclass(frozen=True)
class SearchQuery:
    terms: tuple[str, ...] = ()
    match_any: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.terms


def compile_query(query: str | None, match_any: bool = False) -> SearchQuery:
    """Split on whitespace, lowercase, drop empties and duplicates."""
    terms: list[str] = []
    for token in (query or "").lower().split():
        if token not in terms:
            terms.append(token)
    return SearchQuery(terms=tuple(terms), match_any=match_any)


def matches(query: SearchQuery, text: str) -> bool:
    if query.is_empty:
        return True
    candidate = text.lower()
    if query.match_any:
        return any(term in candidate for term in query.terms)
    return all(term in candidate for term in query.terms)


def display_text(item: TextValue | str) -> str:
    """The searchable/sortable text of a listing item."""
    return item.value if isinstance(item, TextValue) else item


def sort_by_text(items: Iterable[T]) -> list[T]:
    return sorted(items, key=display_text)


def filter_text_values(items: Iterable[T], query: SearchQuery) -> list[T]:
    """Keep items whose display text matches, sorted by display text."""
    return sort_by_text(i for i in items if matches(query, display_text(i)))
