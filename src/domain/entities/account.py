"""Account domain entities: profile, credential and caller identity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class AccountRole(StrEnum):
    """Roles an account can hold. ``USER`` is the non-privileged default."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class Profile:
    """Domain entity for the public identity of an account."""

    username: str
    email: str
    id: UUID = field(default_factory=uuid4)
    first_name: str | None = None
    last_name: str | None = None
    role: AccountRole = AccountRole.USER
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class Credential:
    """Domain entity for the authentication side of an account.

    ``login`` mirrors ``Profile.username`` and ``role`` mirrors
    ``Profile.role``; ``profile_id`` points back at the owning profile.
    """

    login: str
    password_hash: str
    profile_id: UUID
    id: UUID = field(default_factory=uuid4)
    role: AccountRole = AccountRole.USER
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        # Keep the hash out of logs and tracebacks
        return (
            f"Credential(id={self.id!r}, login={self.login!r}, "
            f"profile_id={self.profile_id!r}, role={self.role!r})"
        )


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Authenticated principal making a request."""

    login: str
    role: AccountRole = AccountRole.USER


@dataclass(frozen=True, slots=True)
class AccountPatch:
    """Partial update input. ``None`` means "leave the field untouched"."""

    username: str | None = None
    password: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
