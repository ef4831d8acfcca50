"""Marketplace rules for ticket import and purchase.

Each check raises the matching domain error on the first violation; the
order of checks inside a function is part of the contract.
"""

from datetime import datetime

from src.tg_common.cents import is_valid_cost
from src.tg_common.datetime_utils import ensure_utc
from src.tg_common.enums import TicketState
from src.tg_common.errors import (
    EventEndedError,
    InsufficientBalanceError,
    InvalidValidityWindowError,
    NegativeCostError,
    SelfPurchaseError,
    TicketExpiredError,
    TicketOffMarketError,
)
from src.tg_gateway.user.models import User
from src.tg_ticket.domain.models import Ticket, TicketDraft


def validate_draft(draft: TicketDraft, now: datetime) -> None:
    valid_from = ensure_utc(draft.valid_from)
    valid_to = ensure_utc(draft.valid_to)
    if valid_from > valid_to:
        raise InvalidValidityWindowError()
    if valid_to <= now:
        raise TicketExpiredError()
    if not is_valid_cost(draft.cost_cents):
        raise NegativeCostError(draft.cost_cents)


def check_purchasable(ticket: Ticket, now: datetime) -> None:
    if ticket.state == TicketState.OFF_MARKET:
        raise TicketOffMarketError(ticket.id)
    if ticket.has_ended(now):
        raise EventEndedError(ticket.id)


def check_buyer(ticket: Ticket, owner: User, buyer: User) -> None:
    if owner.id == buyer.id:
        raise SelfPurchaseError()
    if buyer.balance < ticket.cost_cents:
        raise InsufficientBalanceError(ticket.cost_cents, buyer.balance)
