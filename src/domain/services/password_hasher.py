"""Password hasher protocol."""

from typing import Protocol


class IPasswordHasher(Protocol):
    """One-way password hashing. There is deliberately no way back."""

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password into a self-describing encoded string."""
        ...

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Return True if ``plaintext`` matches ``password_hash``."""
        ...

    def needs_rehash(self, password_hash: str) -> bool:
        """Return True if the hash was produced with outdated parameters."""
        ...
