"""JWT authentication provider implementation.

Token payload structure:
    {
        "sub": "alice",
        "role": "USER",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from core.config import settings
from domain.entities.account import AccountRole, CallerIdentity

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider (HS256 by default)."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[CallerIdentity]:
        """
        Validate a JWT and extract the caller identity.

        Args:
            token: The JWT to validate

        Returns:
            CallerIdentity if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError:
            return None

        login = payload.get("sub")
        if not login:
            return None

        try:
            role = AccountRole(payload.get("role", AccountRole.USER))
        except ValueError:
            logger.warning("Rejecting token with unknown role for login=%s", login)
            return None

        return CallerIdentity(login=login, role=role)

    def create_token(self, identity: CallerIdentity) -> str:
        """
        Create a JWT for a verified caller.

        Args:
            identity: The caller to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": identity.login,
            "role": identity.role.value,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
