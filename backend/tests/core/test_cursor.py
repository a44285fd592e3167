"""Tests for cursor parsing — limits, booleans, sentinel offsets, page building."""

import pytest

from folio.core.cursor import (
    MAX_CURSOR, MIN_CURSOR, Page, build_page, parse_bool, parse_limit, resolve_offset,
)
from folio.core.errors import ValidationError


def test_sentinels_bracket_every_tuid_character():
    assert MIN_CURSOR < "0" and "z" < MAX_CURSOR


def test_absent_offset_resolves_to_direction_sentinel():
    assert resolve_offset(False, None) == MIN_CURSOR
    assert resolve_offset(True, None) == MAX_CURSOR
    assert resolve_offset(True, "") == MAX_CURSOR


def test_real_offset_passes_through():
    assert resolve_offset(True, "abc") == "abc"


def test_page_bounded_only_for_real_cursor():
    assert not Page(offset=MIN_CURSOR).bounded
    assert not Page(reverse=True, offset=MAX_CURSOR).bounded
    assert Page(offset="0000000001A").bounded


def test_parse_limit_uses_default_when_absent():
    assert parse_limit(None, 20) == 20
    assert parse_limit("", 20) == 20


def test_parse_limit_accepts_positive_integer():
    assert parse_limit("+5", 20) == 5
    assert parse_limit("7", 20) == 7


@pytest.mark.parametrize("raw", ["0", "-3", "ten", "1.5", "1_000", " 5 ", "0x10"])
def test_parse_limit_rejects_bad_values(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_limit(raw, 20)
    assert exc_info.value.context.parameter == "limit"
    assert exc_info.value.http_status == 400


def test_parse_bool_variants():
    assert parse_bool("true", False, "sorted") is True
    assert parse_bool("T", False, "sorted") is True
    assert parse_bool("0", True, "sorted") is False
    assert parse_bool(None, True, "sorted") is True


def test_parse_bool_rejects_garbage_naming_parameter():
    with pytest.raises(ValidationError) as exc_info:
        parse_bool("maybe", False, "reverse")
    assert exc_info.value.context.parameter == "reverse"


def test_build_page_reverse_defaults_offset_to_max():
    page = build_page("true", "5", None, 100)
    assert page == Page(reverse=True, limit=5, offset=MAX_CURSOR)


def test_build_page_newest_first_default_can_be_overridden():
    assert build_page(None, None, None, 100, default_reverse=True).reverse is True
    assert build_page("false", None, None, 100, default_reverse=True).reverse is False


def test_build_page_applies_default_limit():
    assert build_page(None, None, None, 20).limit == 20
