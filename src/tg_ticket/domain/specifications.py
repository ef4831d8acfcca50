"""Query specifications for the ticket repository.

A TicketSpec is a conjunction of optional filters. The repository turns it
into SQL; is_satisfied_by() evaluates the same predicate in memory.
"""

from dataclasses import dataclass
from datetime import datetime

from src.tg_common.enums import TicketState
from src.tg_ticket.domain.models import Ticket


@dataclass(frozen=True)
class TicketSpec:
    owner_id: str | None = None
    exclude_owner_id: str | None = None
    state: TicketState | None = None
    ends_after: datetime | None = None

    def is_satisfied_by(self, ticket: Ticket) -> bool:
        if self.owner_id is not None and ticket.user_id != self.owner_id:
            return False
        if self.exclude_owner_id is not None and ticket.user_id == self.exclude_owner_id:
            return False
        if self.state is not None and ticket.state != self.state:
            return False
        if self.ends_after is not None and ticket.valid_to <= self.ends_after:
            return False
        return True


def tickets_owned_by(user_id: str) -> TicketSpec:
    return TicketSpec(owner_id=user_id)


def tickets_on_the_market(user_id: str) -> TicketSpec:
    """The user's own tickets currently listed for sale."""
    return TicketSpec(owner_id=user_id, state=TicketState.ON_MARKET)


def tickets_for_sale(viewer_id: str, now: datetime) -> TicketSpec:
    """Listed tickets of other users whose event has not ended yet."""
    return TicketSpec(
        exclude_owner_id=viewer_id,
        state=TicketState.ON_MARKET,
        ends_after=now,
    )
