"""Authentication provider protocol."""

from typing import Optional, Protocol

from domain.entities.account import CallerIdentity


class IAuthProvider(Protocol):
    """Protocol for bearer token providers."""

    async def validate_token(self, token: str) -> Optional[CallerIdentity]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            CallerIdentity if valid, None if invalid
        """
        ...

    def create_token(self, identity: CallerIdentity) -> str:
        """
        Create an authentication token for a verified caller.

        Args:
            identity: The caller to create a token for

        Returns:
            The generated token string
        """
        ...
