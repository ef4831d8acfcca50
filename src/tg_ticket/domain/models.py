"""Domain models for tg_ticket — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.tg_common.enums import TicketState


@dataclass
class TicketDraft:
    """Caller-supplied fields of a ticket being imported."""

    event_name: str
    address: str
    valid_from: datetime
    valid_to: datetime
    cost_cents: int
    state: TicketState = TicketState.ON_MARKET


@dataclass
class Ticket:
    id: str
    user_id: str                 # current owner
    state: TicketState
    valid_from: datetime
    valid_to: datetime
    event_name: str
    address: str
    cost_cents: int
    version: int = 0             # bumped on every UPDATE, guards concurrent writers
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_on_market(self) -> bool:
        return self.state == TicketState.ON_MARKET

    def has_ended(self, now: datetime) -> bool:
        return now >= self.valid_to
