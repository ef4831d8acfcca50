"""Pydantic schemas for transfer history responses."""

from pydantic import BaseModel

from src.tg_common.cents import cents_to_display
from src.tg_common.datetime_utils import to_iso
from src.tg_transfer.domain.models import Transfer


class TransferItem(BaseModel):
    id: str
    ticket_id: str
    kind: str
    buyer_id: str
    seller_id: str | None
    cost_cents: int
    cost_display: str
    created_at: str | None

    @classmethod
    def from_domain(cls, t: Transfer) -> "TransferItem":
        return cls(
            id=t.id,
            ticket_id=t.ticket_id,
            kind=t.kind,
            buyer_id=t.buyer_id,
            seller_id=t.seller_id,
            cost_cents=t.cost_cents,
            cost_display=cents_to_display(t.cost_cents),
            created_at=to_iso(t.created_at),
        )


class TransferListResponse(BaseModel):
    ticket_id: str
    items: list[TransferItem]
