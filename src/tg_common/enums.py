"""Global enums — must match DB CHECK constraints exactly.

See alembic/versions/004_create_ledger_entries.py, 005_create_tickets.py
and 006_create_transfers.py.
"""

from enum import Enum


class TicketState(str, Enum):
    ON_MARKET = "ON_MARKET"
    OFF_MARKET = "OFF_MARKET"


class TransferKind(str, Enum):
    """ORIGIN marks the import of a ticket, SALE a purchase between users."""
    ORIGIN = "ORIGIN"
    SALE = "SALE"


class LedgerEntryType(str, Enum):
    # Deposit/Withdraw
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    # Ticket sale (buyer side / seller side)
    TRANSFER_PAYMENT = "TRANSFER_PAYMENT"
    TRANSFER_RECEIPT = "TRANSFER_RECEIPT"


class LedgerReferenceType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    TICKET = "TICKET"
