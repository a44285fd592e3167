"""Password Hashing — PBKDF2-SHA256 with a per-password random salt.

Stored form: "pbkdf2_sha256$<iterations>$<salt>$<hex digest>", so the iteration
count can be raised later without invalidating existing hashes.
"""

import hashlib
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 200_000


def _digest(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations,
    ).hex()


def hash_password(password: str, salt: str | None = None, iterations: int = ITERATIONS) -> str:
    salt = salt or secrets.token_hex(16)
    return f"{ALGORITHM}${iterations}${salt}${_digest(password, salt, iterations)}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, digest = stored.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    return secrets.compare_digest(_digest(password, salt, rounds), digest)
