"""Tests for the search matcher — term compilation, matching, sorting."""

from folio.core.domain_types import TextValue
from folio.core.search import (
    SearchQuery, compile_query, filter_text_values, matches, sort_by_text,
)


def test_compile_query_lowercases_and_dedupes():
    query = compile_query("  Dragon dragon  Fire ")
    assert query.terms == ("dragon", "fire")


def test_blank_query_is_empty():
    assert compile_query("   ").is_empty
    assert compile_query(None).is_empty


def test_empty_query_matches_everything():
    assert matches(SearchQuery(), "anything")


def test_all_terms_required_by_default():
    query = compile_query("dragon fire")
    assert matches(query, "The Dragon of Fire")
    assert not matches(query, "The Dragon of Ice")


def test_any_term_suffices_with_match_any():
    query = compile_query("dragon fire", match_any=True)
    assert matches(query, "The Dragon of Ice")


def test_filter_text_values_sorts_by_display_text():
    items = [
        TextValue("3", "Zebra Dragon"),
        TextValue("1", "Ancient Dragon"),
        TextValue("2", "Owl"),
    ]
    found = filter_text_values(items, compile_query("dragon"))
    assert [i.id for i in found] == ["1", "3"]


def test_sort_by_text_on_plain_values():
    assert sort_by_text(["b", "a", "c"]) == ["a", "b", "c"]
