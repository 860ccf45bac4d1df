"""bcrypt password hashing.

Hashing is CPU bound, so the async helpers push it onto a worker thread to
keep the event loop free.
"""

import asyncio

import bcrypt

from libs.common.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    rounds = rounds or get_settings().BCRYPT_ROUNDS
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
