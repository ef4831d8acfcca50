"""TransferRepository — raw SQL, INSERT and SELECT only.

The transfers table has no UPDATE/DELETE path anywhere in the code base.
Writes join the caller's transaction.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.errors import InternalError
from src.tg_transfer.domain.models import Transfer

_COLUMNS = "id, ticket_id, buyer_id, seller_id, cost_cents, kind, created_at"

_INSERT_TRANSFER_SQL = text(f"""
    INSERT INTO transfers (id, ticket_id, buyer_id, seller_id, cost_cents, kind)
    VALUES (:id, :ticket_id, :buyer_id, :seller_id, :cost_cents, :kind)
    RETURNING {_COLUMNS}
""")

_LIST_BY_TICKET_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM transfers
    WHERE ticket_id = :ticket_id
    ORDER BY created_at ASC, seq ASC
""")


def _row_to_transfer(row: object) -> Transfer:
    return Transfer(
        id=row.id,  # type: ignore[attr-defined]
        ticket_id=row.ticket_id,  # type: ignore[attr-defined]
        buyer_id=row.buyer_id,  # type: ignore[attr-defined]
        seller_id=row.seller_id,  # type: ignore[attr-defined]
        cost_cents=row.cost_cents,  # type: ignore[attr-defined]
        kind=row.kind,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class TransferRepository:
    async def append(self, db: AsyncSession, transfer: Transfer) -> Transfer:
        result = await db.execute(
            _INSERT_TRANSFER_SQL,
            {
                "id": transfer.id,
                "ticket_id": transfer.ticket_id,
                "buyer_id": transfer.buyer_id,
                "seller_id": transfer.seller_id,
                "cost_cents": transfer.cost_cents,
                "kind": transfer.kind,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transfer insert returned no rows")
        return _row_to_transfer(row)

    async def list_by_ticket(self, db: AsyncSession, ticket_id: str) -> list[Transfer]:
        result = await db.execute(_LIST_BY_TICKET_SQL, {"ticket_id": ticket_id})
        return [_row_to_transfer(row) for row in result.fetchall()]
