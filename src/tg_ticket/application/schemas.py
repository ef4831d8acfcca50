"""Pydantic schemas for tg_ticket API requests and responses.

Datetimes without an offset are read as UTC. Cost is only capped at the BIGINT
column limit here: negative costs reach the service and fail with
NegativeCostError (3004), so the client sees the marketplace error code rather
than a schema error.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.tg_common.cents import MAX_CENTS, cents_to_display
from src.tg_common.datetime_utils import ensure_utc
from src.tg_common.enums import TicketState
from src.tg_ticket.domain.models import Ticket, TicketDraft

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TicketImportRequest(BaseModel):
    event_name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    valid_from: datetime
    valid_to: datetime
    cost_cents: int = Field(..., le=MAX_CENTS)
    state: TicketState = TicketState.ON_MARKET

    def to_draft(self) -> TicketDraft:
        return TicketDraft(
            event_name=self.event_name,
            address=self.address,
            valid_from=ensure_utc(self.valid_from),
            valid_to=ensure_utc(self.valid_to),
            cost_cents=self.cost_cents,
            state=self.state,
        )


class TicketMoveRequest(BaseModel):
    state: TicketState


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TicketResponse(BaseModel):
    id: str
    owner_id: str
    state: TicketState
    event_name: str
    address: str
    valid_from: str  # ISO8601 string
    valid_to: str
    cost_cents: int
    cost_display: str
    version: int

    @classmethod
    def from_domain(cls, t: Ticket) -> "TicketResponse":
        return cls(
            id=t.id,
            owner_id=t.user_id,
            state=t.state,
            event_name=t.event_name,
            address=t.address,
            valid_from=ensure_utc(t.valid_from).isoformat(),
            valid_to=ensure_utc(t.valid_to).isoformat(),
            cost_cents=t.cost_cents,
            cost_display=cents_to_display(t.cost_cents),
            version=t.version,
        )


class TicketListResponse(BaseModel):
    items: list[TicketResponse]
    total: int

    @classmethod
    def from_domain(cls, tickets: list[Ticket]) -> "TicketListResponse":
        return cls(
            items=[TicketResponse.from_domain(t) for t in tickets],
            total=len(tickets),
        )


class PurchaseResponse(BaseModel):
    ticket: TicketResponse
    transfer_id: str
    paid_cents: int
    paid_display: str
    balance_cents: int
    balance_display: str
