"""Account domain — balances and the movements that change them.

All amounts are integer cents. A BalanceMovement is the request to change a
balance; a LedgerEntry is its journaled result.
"""

from dataclasses import dataclass
from datetime import datetime

from src.tg_common.enums import LedgerEntryType, LedgerReferenceType

_OUTGOING = frozenset({LedgerEntryType.WITHDRAW, LedgerEntryType.TRANSFER_PAYMENT})


@dataclass
class Account:
    id: str
    user_id: str
    balance: int
    version: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BalanceMovement:
    user_id: str
    amount: int                      # always positive; direction comes from entry_type
    entry_type: LedgerEntryType
    reference_type: LedgerReferenceType
    reference_id: str | None = None
    description: str | None = None

    @property
    def is_outgoing(self) -> bool:
        return self.entry_type in _OUTGOING

    @property
    def signed_amount(self) -> int:
        return -self.amount if self.is_outgoing else self.amount

    @classmethod
    def deposit(cls, user_id: str, amount: int) -> "BalanceMovement":
        return cls(user_id, amount, LedgerEntryType.DEPOSIT, LedgerReferenceType.DEPOSIT,
                   description="Simulated deposit")

    @classmethod
    def withdrawal(cls, user_id: str, amount: int) -> "BalanceMovement":
        return cls(user_id, amount, LedgerEntryType.WITHDRAW, LedgerReferenceType.WITHDRAW,
                   description="Simulated withdrawal")

    @classmethod
    def ticket_payment(
        cls, user_id: str, amount: int, ticket_id: str, description: str
    ) -> "BalanceMovement":
        """Buyer side of a sale."""
        return cls(user_id, amount, LedgerEntryType.TRANSFER_PAYMENT,
                   LedgerReferenceType.TICKET, ticket_id, description)

    @classmethod
    def ticket_receipt(
        cls, user_id: str, amount: int, ticket_id: str, description: str
    ) -> "BalanceMovement":
        """Seller side of a sale."""
        return cls(user_id, amount, LedgerEntryType.TRANSFER_RECEIPT,
                   LedgerReferenceType.TICKET, ticket_id, description)


@dataclass
class LedgerEntry:
    id: int
    user_id: str
    entry_type: str
    amount: int                      # signed: negative for money leaving the account
    balance_after: int
    reference_type: str | None = None
    reference_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None
