"""Unit tests for TicketRepository using a MagicMock AsyncSession."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.tg_common.enums import TicketState
from src.tg_common.errors import InternalError
from src.tg_ticket.domain.models import Ticket
from src.tg_ticket.domain.specifications import tickets_for_sale
from src.tg_ticket.infrastructure.persistence import TicketRepository

START = datetime(2030, 1, 1, 20, 0, tzinfo=UTC)


def _make_ticket_row(**kwargs) -> MagicMock:
    row = MagicMock()
    row.id = kwargs.get("id", "t-1")
    row.user_id = kwargs.get("user_id", "alice")
    row.state = kwargs.get("state", "ON_MARKET")
    row.valid_from = START
    row.valid_to = START + timedelta(hours=3)
    row.event_name = "Concert"
    row.address = "Main Hall"
    row.cost_cents = kwargs.get("cost_cents", 5000)
    row.version = kwargs.get("version", 0)
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _fetchone(row: object) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = row
    return result


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


class TestGetById:
    async def test_found(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(_make_ticket_row(state="OFF_MARKET")))

        ticket = await TicketRepository().get_by_id(db, "t-1")

        assert ticket is not None
        assert ticket.state is TicketState.OFF_MARKET
        assert ticket.cost_cents == 5000

    async def test_missing(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(None))
        assert await TicketRepository().get_by_id(db, "nope") is None


class TestAdd:
    async def test_binds_state_value(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(_make_ticket_row()))
        ticket = Ticket(
            id="t-1", user_id="alice", state=TicketState.ON_MARKET,
            valid_from=START, valid_to=START + timedelta(hours=3),
            event_name="Concert", address="Main Hall", cost_cents=5000,
        )

        stored = await TicketRepository().add(db, ticket)

        assert stored.id == "t-1"
        params = db.execute.call_args.args[1]
        assert params["state"] == "ON_MARKET"
        assert params["user_id"] == "alice"

    async def test_no_row_back_is_internal_error(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(None))
        ticket = Ticket("t-1", "alice", TicketState.ON_MARKET, START, START, "c", "a", 1)
        with pytest.raises(InternalError):
            await TicketRepository().add(db, ticket)


class TestVersionedWrites:
    async def test_transfer_ownership_passes_expected_version(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(
            _make_ticket_row(user_id="bob", state="OFF_MARKET", version=4)
        ))

        sold = await TicketRepository().transfer_ownership(db, "t-1", "bob", 3)

        assert sold is not None
        assert sold.user_id == "bob"
        assert sold.version == 4
        assert db.execute.call_args.args[1] == {
            "ticket_id": "t-1", "new_owner_id": "bob", "expected_version": 3,
        }

    async def test_stale_version_returns_none(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(None))
        assert await TicketRepository().transfer_ownership(db, "t-1", "bob", 0) is None
        assert await TicketRepository().update_state(db, "t-1", TicketState.OFF_MARKET, 0) is None

    async def test_update_state_binds_value(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_fetchone(_make_ticket_row(state="OFF_MARKET")))
        await TicketRepository().update_state(db, "t-1", TicketState.OFF_MARKET, 2)
        assert db.execute.call_args.args[1]["state"] == "OFF_MARKET"


class TestList:
    async def test_maps_orm_rows(self, db: MagicMock) -> None:
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            _make_ticket_row(id="t-2"), _make_ticket_row(id="t-1"),
        ]
        db.execute = AsyncMock(return_value=result)

        tickets = await TicketRepository().list(db, tickets_for_sale("bob", START))

        assert [t.id for t in tickets] == ["t-2", "t-1"]

    async def test_spec_becomes_where_clause(self, db: MagicMock) -> None:
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        db.execute = AsyncMock(return_value=result)

        await TicketRepository().list(db, tickets_for_sale("bob", START))

        sql = str(db.execute.call_args.args[0])
        assert "tickets.user_id !=" in sql
        assert "tickets.state =" in sql
        assert "tickets.valid_to >" in sql
        assert "ORDER BY tickets.created_at DESC" in sql
