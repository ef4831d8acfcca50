"""AccountRepository — raw SQL over accounts and ledger_entries.

Balance changes are a single UPDATE ... RETURNING; outgoing movements carry a
`balance >= :floor` guard so concurrent debits can never overdraw. The
ledger row is written in the same transaction, which the caller owns.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_account.domain.models import Account, BalanceMovement, LedgerEntry
from src.tg_common.errors import AccountNotFoundError, InsufficientBalanceError, InternalError

_ACCOUNT_COLUMNS = "id, user_id, balance, version, created_at, updated_at"
_LEDGER_COLUMNS = (
    "id, user_id, entry_type, amount, balance_after, "
    "reference_type, reference_id, description, created_at"
)

_SELECT_ACCOUNT = text(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE user_id = :user_id")

# :delta is signed; :floor is 0 for credits and the debit amount for debits
_MOVE_BALANCE = text(f"""
    UPDATE accounts
    SET balance = balance + :delta,
        version = version + 1
    WHERE user_id = :user_id AND balance >= :floor
    RETURNING {_ACCOUNT_COLUMNS}
""")

_JOURNAL = text(f"""
    INSERT INTO ledger_entries
        (user_id, entry_type, amount, balance_after, reference_type, reference_id, description)
    VALUES
        (:user_id, :entry_type, :amount, :balance_after, :reference_type, :reference_id, :description)
    RETURNING {_LEDGER_COLUMNS}
""")

_LEDGER_PAGE = text(f"""
    SELECT {_LEDGER_COLUMNS}
    FROM ledger_entries
    WHERE user_id = :user_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:entry_type AS TEXT) IS NULL OR entry_type = CAST(:entry_type AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _account(row: Any) -> Account:
    return Account(
        id=str(row.id),
        user_id=row.user_id,
        balance=row.balance,
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _entry(row: Any) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,
        user_id=row.user_id,
        entry_type=row.entry_type,
        amount=row.amount,
        balance_after=row.balance_after,
        reference_type=row.reference_type,
        reference_id=row.reference_id,
        description=row.description,
        created_at=row.created_at,
    )


class AccountRepository:
    async def get_account_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Account | None:
        row = (await db.execute(_SELECT_ACCOUNT, {"user_id": user_id})).fetchone()
        return _account(row) if row else None

    async def apply(
        self, db: AsyncSession, movement: BalanceMovement
    ) -> tuple[Account, LedgerEntry]:
        moved = await db.execute(
            _MOVE_BALANCE,
            {
                "user_id": movement.user_id,
                "delta": movement.signed_amount,
                "floor": movement.amount if movement.is_outgoing else 0,
            },
        )
        row = moved.fetchone()
        if row is None:
            current = await self.get_account_by_user_id(db, movement.user_id)
            if current is None:
                raise AccountNotFoundError(movement.user_id)
            raise InsufficientBalanceError(movement.amount, current.balance)
        account = _account(row)

        journaled = await db.execute(
            _JOURNAL,
            {
                "user_id": movement.user_id,
                "entry_type": movement.entry_type.value,
                "amount": movement.signed_amount,
                "balance_after": account.balance,
                "reference_type": movement.reference_type.value,
                "reference_id": movement.reference_id,
                "description": movement.description,
            },
        )
        entry_row = journaled.fetchone()
        if entry_row is None:
            raise InternalError("Ledger insert returned no rows")
        return account, _entry(entry_row)

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LEDGER_PAGE,
            {"user_id": user_id, "cursor_id": cursor_id, "entry_type": entry_type, "limit": limit},
        )
        return [_entry(row) for row in result.fetchall()]
