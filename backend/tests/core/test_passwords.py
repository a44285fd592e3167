"""Tests for password hashing."""

from folio.core.passwords import hash_password, verify_password


def test_hash_round_trip():
    stored = hash_password("s3cret", iterations=1_000)
    assert stored.startswith("pbkdf2_sha256$1000$")
    assert verify_password("s3cret", stored)
    assert not verify_password("wrong", stored)


def test_salts_differ():
    assert hash_password("x", iterations=1_000) != hash_password("x", iterations=1_000)


def test_malformed_hash_never_verifies():
    assert not verify_password("x", "")
    assert not verify_password("x", "md5$1$a$b")
