"""Pydantic schemas for /account endpoints, plus the ledger page cursor."""

import base64
import binascii
import json

from pydantic import BaseModel, Field

from src.tg_account.domain.models import LedgerEntry
from src.tg_common.cents import MAX_CENTS, cents_to_display
from src.tg_common.datetime_utils import to_iso

# ledger_entries.id is a BIGSERIAL
_MAX_LEDGER_ID = 2**63 - 1


def cursor_encode(last_id: int) -> str:
    """Opaque cursor: urlsafe Base64 of {"id": <last ledger id>}."""
    return base64.urlsafe_b64encode(json.dumps({"id": last_id}).encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Last seen ledger id, or None for a missing or unreadable cursor (first page)."""
    if not cursor:
        return None
    try:
        last_id = int(json.loads(base64.urlsafe_b64decode(cursor.encode()))["id"])
    except (binascii.Error, ValueError, KeyError, TypeError, OverflowError):
        return None
    if not 1 <= last_id <= _MAX_LEDGER_ID:
        return None
    return last_id


class AmountRequest(BaseModel):
    amount_cents: int = Field(..., gt=0, le=MAX_CENTS, description="Amount in cents")


class BalanceResponse(BaseModel):
    user_id: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_cents(cls, user_id: str, balance: int) -> "BalanceResponse":
        return cls(user_id=user_id, balance_cents=balance,
                   balance_display=cents_to_display(balance))


class BalanceChangeResponse(BaseModel):
    balance_cents: int
    balance_display: str
    amount_cents: int
    amount_display: str
    ledger_entry_id: int

    @classmethod
    def from_result(cls, balance: int, amount: int, entry_id: int) -> "BalanceChangeResponse":
        return cls(
            balance_cents=balance,
            balance_display=cents_to_display(balance),
            amount_cents=amount,
            amount_display=cents_to_display(amount),
            ledger_entry_id=entry_id,
        )


class LedgerEntryItem(BaseModel):
    id: int
    entry_type: str
    amount_cents: int
    amount_display: str
    balance_after_cents: int
    balance_after_display: str
    reference_type: str | None
    reference_id: str | None
    description: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, e: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=e.id,
            entry_type=e.entry_type,
            amount_cents=e.amount,
            amount_display=cents_to_display(e.amount),
            balance_after_cents=e.balance_after,
            balance_after_display=cents_to_display(e.balance_after),
            reference_type=e.reference_type,
            reference_id=e.reference_id,
            description=e.description,
            created_at=to_iso(e.created_at),
        )


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool
