"""Tests for filter normalizers."""

import pytest

from folio.core import tuid
from folio.core.domain_types import ContentType
from folio.core.errors import ValidationError
from folio.core.parameters import enum_value, iso_date, is_email, lowercase, tuid_value


def test_lowercase_trims():
    assert lowercase("tag", "  Fiction ") == "fiction"


def test_tuid_value_accepts_valid_id():
    value = tuid.new_id()
    assert tuid_value("editor", value) == value


def test_tuid_value_rejects_naming_parameter():
    with pytest.raises(ValidationError) as exc_info:
        tuid_value("editor", "nope")
    assert exc_info.value.context.parameter == "editor"


def test_enum_value_uppercases():
    assert enum_value(ContentType)("type", "book") == "BOOK"


def test_enum_value_rejects_unknown_member():
    with pytest.raises(ValidationError):
        enum_value(ContentType)("type", "poem")


def test_iso_date():
    assert iso_date("date", "2024-02-29") == "2024-02-29"
    with pytest.raises(ValidationError):
        iso_date("date", "2024-02-30")


def test_is_email():
    assert is_email("a@b.io")
    assert not is_email("a@b")
