"""Domain models for tg_transfer — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Transfer:
    """One ownership/payment event for a ticket. Never mutated once written.

    ORIGIN transfers are written on import with buyer_id == seller_id == the
    importing user. SALE transfers name the paying buyer and the paid seller.
    """

    id: str
    ticket_id: str
    buyer_id: str
    seller_id: str | None
    cost_cents: int
    kind: str                        # TransferKind value
    created_at: datetime | None = None
