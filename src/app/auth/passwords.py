"""Password hashing with bcrypt.

Hashing is deliberately slow, so both operations run in the threadpool to
keep the event loop serving other requests.
"""

from __future__ import annotations

import bcrypt
from starlette.concurrency import run_in_threadpool


# bcrypt only looks at the first 72 bytes; recent releases raise instead of
# truncating, so the cut is made here.
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


def _verify(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_secret(password), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password(password: str, rounds: int = 10) -> str:
    """Return the bcrypt hash of ``password``."""
    return await run_in_threadpool(_hash, password, rounds)


async def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    return await run_in_threadpool(_verify, password, hashed)
