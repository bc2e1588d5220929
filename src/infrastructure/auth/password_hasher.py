"""Argon2id password hashing (argon2-cffi)."""

import structlog
from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from core.config import settings
from core.exceptions import InfrastructureError

logger = structlog.get_logger()


class Argon2PasswordHasher:
    """Adaptive one-way hashing.

    The encoded hash embeds its own cost parameters, so raising
    ``time_cost``/``memory_cost`` later keeps old hashes verifiable while
    new hashes use the new cost.
    """

    def __init__(
        self,
        time_cost: int = settings.password_time_cost,
        memory_cost: int = settings.password_memory_cost,
        parallelism: int = settings.password_parallelism,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, plaintext: str) -> str:
        try:
            return self._hasher.hash(plaintext)
        except HashingError as exc:
            logger.error("password_hashing_failed", error=str(exc))
            raise InfrastructureError() from exc

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, plaintext)
        except InvalidHashError:
            logger.warning("password_hash_malformed")
            return False
        except VerificationError:
            # Covers VerifyMismatchError
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, ValueError):
            return False
