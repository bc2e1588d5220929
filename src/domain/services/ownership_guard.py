"""Ownership authorization for per-account operations."""

from uuid import UUID

import structlog

from core.exceptions import AccountNotFoundError, ForbiddenError
from domain.entities.account import CallerIdentity, Credential
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class OwnershipGuard:
    """Decides whether a caller may act on a given account.

    The owner of an account is the login of the credential linked to the
    account's profile. Only that login is allowed through.
    """

    async def authorize(
        self,
        uow: IUnitOfWork,
        requester: CallerIdentity,
        account_id: UUID,
        lock: bool = False,
    ) -> Credential:
        """Return the target's credential if ``requester`` owns it.

        Raises:
            AccountNotFoundError: No credential is linked to ``account_id``.
            ForbiddenError: The credential belongs to someone else.
        """
        credential = await uow.credentials.get_by_profile_id(account_id, lock=lock)
        if not credential:
            raise AccountNotFoundError(str(account_id))

        if credential.login != requester.login:
            logger.warning(
                "ownership_denied",
                requester=requester.login,
                owner=credential.login,
                account_id=str(account_id),
            )
            raise ForbiddenError()

        return credential
