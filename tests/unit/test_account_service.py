"""Unit tests for AccountApplicationService using a mock repository."""

import base64
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.tg_account.application.schemas import (
    AmountRequest,
    BalanceChangeResponse,
    BalanceResponse,
    cursor_decode,
    cursor_encode,
)
from src.tg_account.application.service import AccountApplicationService
from src.tg_account.domain.models import Account, LedgerEntry
from src.tg_common.enums import LedgerEntryType
from src.tg_common.errors import AccountNotFoundError, InsufficientBalanceError


def _make_account(balance: int = 100000) -> Account:
    return Account(
        id="uuid-1",
        user_id="user-1",
        balance=balance,
        version=1,
        created_at=datetime.now(UTC),
        updated_at=datetime.now(UTC),
    )


def _make_entry(entry_id: int = 1, amount: int = 10000, entry_type: str = "DEPOSIT") -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        user_id="user-1",
        entry_type=entry_type,
        amount=amount,
        balance_after=110000,
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def db() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestGetBalance:
    async def test_returns_balance(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_account_by_user_id.return_value = _make_account(150000)

        result = await AccountApplicationService(repo=repo).get_balance(db, "user-1")

        assert isinstance(result, BalanceResponse)
        assert result.balance_cents == 150000
        assert result.balance_display == "$1,500.00"

    async def test_missing_account(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.get_account_by_user_id.return_value = None
        with pytest.raises(AccountNotFoundError):
            await AccountApplicationService(repo=repo).get_balance(db, "user-x")


class TestDepositWithdraw:
    async def test_deposit_commits(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.apply.return_value = (_make_account(110000), _make_entry(7))

        result = await AccountApplicationService(repo=repo).deposit(db, "user-1", 10000)

        assert isinstance(result, BalanceChangeResponse)
        assert result.balance_cents == 110000
        assert result.amount_display == "$100.00"
        assert result.ledger_entry_id == 7
        movement = repo.apply.call_args.args[1]
        assert movement.entry_type == LedgerEntryType.DEPOSIT
        assert movement.signed_amount == 10000
        db.commit.assert_awaited_once()

    async def test_withdraw_failure_rolls_back(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.apply.side_effect = InsufficientBalanceError(5000, 100)

        with pytest.raises(InsufficientBalanceError):
            await AccountApplicationService(repo=repo).withdraw(db, "user-1", 5000)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestListLedger:
    async def test_has_more_sets_cursor(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.list_ledger_entries.return_value = [_make_entry(i) for i in (5, 4, 3)]

        result = await AccountApplicationService(repo=repo).list_ledger(db, "user-1", None, 2, None)

        assert result.has_more is True
        assert [i.id for i in result.items] == [5, 4]
        assert cursor_decode(result.next_cursor) == 4
        # limit+1 fetched to detect the next page
        assert repo.list_ledger_entries.call_args.args[3] == 3

    async def test_last_page(self, db: MagicMock) -> None:
        repo = AsyncMock()
        repo.list_ledger_entries.return_value = [_make_entry(1)]

        result = await AccountApplicationService(repo=repo).list_ledger(
            db, "user-1", cursor_encode(2), 20, "DEPOSIT"
        )

        assert result.has_more is False
        assert result.next_cursor is None
        assert repo.list_ledger_entries.call_args.args[2] == 2


def test_cursor_decode_rejects_garbage() -> None:
    assert cursor_decode("!!!not-base64") is None
    assert cursor_decode(None) is None


def _raw_cursor(payload: bytes) -> str:
    return base64.urlsafe_b64encode(payload).decode()


@pytest.mark.parametrize(
    "payload",
    [
        b'{"id": 1e400}',  # float infinity
        b'{"id": 9223372036854775808}',  # past BIGINT
        b'{"id": 0}',
        b'{"id": -5}',
        b'{"id": "abc"}',
        b'{"id": [1]}',
        b"[1, 2]",
        b"\xff\xfe",
    ],
)
def test_cursor_decode_out_of_range_or_malformed(payload: bytes) -> None:
    assert cursor_decode(_raw_cursor(payload)) is None


def test_cursor_decode_accepts_largest_ledger_id() -> None:
    assert cursor_decode(cursor_encode(2**63 - 1)) == 2**63 - 1


def test_amount_request_bounds() -> None:
    assert AmountRequest(amount_cents=2**63 - 1).amount_cents == 2**63 - 1
    with pytest.raises(ValidationError):
        AmountRequest(amount_cents=2**63)
    with pytest.raises(ValidationError):
        AmountRequest(amount_cents=0)
