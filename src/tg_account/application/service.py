"""AccountApplicationService — balance queries and simulated cash in/out.

Deposits and withdrawals are their own unit of work (commit or rollback
here). Ticket payments do not pass through this service; the ticket service
applies BalanceMovements on the repository inside its own transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_account.application.schemas import (
    BalanceChangeResponse,
    BalanceResponse,
    LedgerEntryItem,
    LedgerResponse,
    cursor_decode,
    cursor_encode,
)
from src.tg_account.domain.models import BalanceMovement
from src.tg_account.domain.repository import AccountRepositoryProtocol
from src.tg_account.infrastructure.persistence import AccountRepository
from src.tg_common.errors import AccountNotFoundError


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        account = await self._repo.get_account_by_user_id(db, user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return BalanceResponse.from_cents(user_id, account.balance)

    async def deposit(
        self, db: AsyncSession, user_id: str, amount_cents: int
    ) -> BalanceChangeResponse:
        return await self._move(db, BalanceMovement.deposit(user_id, amount_cents))

    async def withdraw(
        self, db: AsyncSession, user_id: str, amount_cents: int
    ) -> BalanceChangeResponse:
        return await self._move(db, BalanceMovement.withdrawal(user_id, amount_cents))

    async def _move(self, db: AsyncSession, movement: BalanceMovement) -> BalanceChangeResponse:
        try:
            account, entry = await self._repo.apply(db, movement)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return BalanceChangeResponse.from_result(account.balance, movement.amount, entry.id)

    async def list_ledger(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None,
        limit: int,
        entry_type: str | None,
    ) -> LedgerResponse:
        """Newest first. One extra row is fetched to tell whether a next page exists."""
        entries = await self._repo.list_ledger_entries(
            db, user_id, cursor_decode(cursor), limit + 1, entry_type
        )
        page = entries[:limit]
        has_more = len(entries) > limit
        return LedgerResponse(
            items=[LedgerEntryItem.from_domain(e) for e in page],
            next_cursor=cursor_encode(page[-1].id) if has_more and page else None,
            has_more=has_more,
        )
