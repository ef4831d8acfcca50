"""Account repository Protocol, implemented by infrastructure.persistence."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_account.domain.models import Account, BalanceMovement, LedgerEntry


class AccountRepositoryProtocol(Protocol):
    async def get_account_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Account | None: ...

    async def apply(
        self, db: AsyncSession, movement: BalanceMovement
    ) -> tuple[Account, LedgerEntry]:
        """Change the balance and journal it in the caller's transaction.

        Raises InsufficientBalanceError when an outgoing movement exceeds
        the balance, AccountNotFoundError when the user has no account.
        """
        ...

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]: ...
