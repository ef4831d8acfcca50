"""TicketRepository — concrete implementation of TicketRepositoryProtocol.

Point reads and writes use raw text() SQL; specification queries are built
with select() over TicketORM because their WHERE clause varies.

Mutations guard on `version` (optimistic concurrency). Zero rows back means
another transaction changed the ticket first.
"""

from typing import Any

from sqlalchemy import ColumnElement, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.enums import TicketState
from src.tg_common.errors import InternalError
from src.tg_ticket.domain.models import Ticket
from src.tg_ticket.domain.specifications import TicketSpec
from src.tg_ticket.infrastructure.db_models import TicketORM

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, user_id, state, valid_from, valid_to, event_name, address,
    cost_cents, version, created_at, updated_at
"""

_GET_TICKET_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM tickets
    WHERE id = :ticket_id
""")

_INSERT_TICKET_SQL = text(f"""
    INSERT INTO tickets
        (id, user_id, state, valid_from, valid_to, event_name, address, cost_cents, version)
    VALUES
        (:id, :user_id, :state, :valid_from, :valid_to, :event_name, :address, :cost_cents, 0)
    RETURNING {_COLUMNS}
""")

_UPDATE_STATE_SQL = text(f"""
    UPDATE tickets
    SET state = :state,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :ticket_id AND version = :expected_version
    RETURNING {_COLUMNS}
""")

# A sold ticket always leaves the market in the same statement
_TRANSFER_OWNERSHIP_SQL = text(f"""
    UPDATE tickets
    SET user_id = :new_owner_id,
        state = 'OFF_MARKET',
        version = version + 1,
        updated_at = NOW()
    WHERE id = :ticket_id
      AND version = :expected_version
      AND state <> 'OFF_MARKET'
    RETURNING {_COLUMNS}
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_ticket(row: Any) -> Ticket:
    return Ticket(
        id=row.id,
        user_id=row.user_id,
        state=TicketState(row.state),
        valid_from=row.valid_from,
        valid_to=row.valid_to,
        event_name=row.event_name,
        address=row.address,
        cost_cents=row.cost_cents,
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _criteria(spec: TicketSpec) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if spec.owner_id is not None:
        clauses.append(TicketORM.user_id == spec.owner_id)
    if spec.exclude_owner_id is not None:
        clauses.append(TicketORM.user_id != spec.exclude_owner_id)
    if spec.state is not None:
        clauses.append(TicketORM.state == spec.state.value)
    if spec.ends_after is not None:
        clauses.append(TicketORM.valid_to > spec.ends_after)
    return clauses


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TicketRepository:
    async def get_by_id(self, db: AsyncSession, ticket_id: str) -> Ticket | None:
        result = await db.execute(_GET_TICKET_SQL, {"ticket_id": ticket_id})
        row = result.fetchone()
        return _row_to_ticket(row) if row else None

    async def add(self, db: AsyncSession, ticket: Ticket) -> Ticket:
        result = await db.execute(
            _INSERT_TICKET_SQL,
            {
                "id": ticket.id,
                "user_id": ticket.user_id,
                "state": ticket.state.value,
                "valid_from": ticket.valid_from,
                "valid_to": ticket.valid_to,
                "event_name": ticket.event_name,
                "address": ticket.address,
                "cost_cents": ticket.cost_cents,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Ticket insert returned no rows")
        return _row_to_ticket(row)

    async def list(
        self, db: AsyncSession, spec: TicketSpec | None = None
    ) -> list[Ticket]:
        stmt = select(TicketORM)
        if spec is not None:
            stmt = stmt.where(*_criteria(spec))
        stmt = stmt.order_by(TicketORM.created_at.desc(), TicketORM.id.desc())
        result = await db.execute(stmt)
        return [_row_to_ticket(orm) for orm in result.scalars().all()]

    async def update_state(
        self,
        db: AsyncSession,
        ticket_id: str,
        state: TicketState,
        expected_version: int,
    ) -> Ticket | None:
        result = await db.execute(
            _UPDATE_STATE_SQL,
            {
                "ticket_id": ticket_id,
                "state": state.value,
                "expected_version": expected_version,
            },
        )
        row = result.fetchone()
        return _row_to_ticket(row) if row else None

    async def transfer_ownership(
        self,
        db: AsyncSession,
        ticket_id: str,
        new_owner_id: str,
        expected_version: int,
    ) -> Ticket | None:
        result = await db.execute(
            _TRANSFER_OWNERSHIP_SQL,
            {
                "ticket_id": ticket_id,
                "new_owner_id": new_owner_id,
                "expected_version": expected_version,
            },
        )
        row = result.fetchone()
        return _row_to_ticket(row) if row else None
