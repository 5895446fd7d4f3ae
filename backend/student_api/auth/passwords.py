"""
Student API — Password Hashing
===============================

What:  One-way adaptive hashing for stored user passwords.
How:   bcrypt with a per-password random salt and a fixed cost factor.
       bcrypt is CPU-bound (~50-100ms at cost 10), so both calls run in
       Starlette's threadpool and the event loop keeps serving requests.
"""

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    """
    Hashes and verifies passwords with bcrypt.

    Attributes:
        rounds: bcrypt cost factor (log2 of the iteration count)
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("ascii")

    def verify_sync(self, plaintext: str, digest: str) -> bool:
        """
        Constant-time comparison of `plaintext` against a stored digest.

        Returns False (never raises) for a mismatch, a missing digest, or a
        digest that is not a bcrypt hash at all.
        """
        if not plaintext or not digest:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            logger.warning("Stored password digest is not a valid bcrypt hash")
            return False

    async def hash(self, plaintext: str) -> str:
        return await run_in_threadpool(self.hash_sync, plaintext)

    async def verify(self, plaintext: str, digest: str) -> bool:
        return await run_in_threadpool(self.verify_sync, plaintext, digest)
