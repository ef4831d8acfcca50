"""Unit tests for ticket domain rules and query specifications."""

from datetime import UTC, datetime, timedelta

import pytest

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
from src.tg_ticket.domain.rules import check_buyer, check_purchasable, validate_draft
from src.tg_ticket.domain.specifications import (
    TicketSpec,
    tickets_for_sale,
    tickets_on_the_market,
    tickets_owned_by,
)

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=UTC)


def _draft(**kwargs) -> TicketDraft:
    return TicketDraft(
        event_name="Concert",
        address="Main Hall",
        valid_from=kwargs.get("valid_from", NOW + timedelta(days=1)),
        valid_to=kwargs.get("valid_to", NOW + timedelta(days=1, hours=3)),
        cost_cents=kwargs.get("cost_cents", 5000),
    )


def _ticket(**kwargs) -> Ticket:
    return Ticket(
        id="t-1",
        user_id=kwargs.get("user_id", "alice"),
        state=kwargs.get("state", TicketState.ON_MARKET),
        valid_from=NOW + timedelta(days=1),
        valid_to=kwargs.get("valid_to", NOW + timedelta(days=1, hours=3)),
        event_name="Concert",
        address="Main Hall",
        cost_cents=kwargs.get("cost_cents", 5000),
    )


def _user(uid: str, balance: int = 0) -> User:
    return User(id=uid, username=uid, is_active=True, balance=balance)


class TestValidateDraft:
    def test_valid_draft_passes(self) -> None:
        validate_draft(_draft(), NOW)

    def test_zero_cost_and_instant_window_pass(self) -> None:
        moment = NOW + timedelta(hours=1)
        validate_draft(_draft(valid_from=moment, valid_to=moment, cost_cents=0), NOW)

    def test_inverted_window(self) -> None:
        with pytest.raises(InvalidValidityWindowError):
            validate_draft(
                _draft(valid_from=NOW + timedelta(days=2), valid_to=NOW + timedelta(days=1)),
                NOW,
            )

    def test_window_checked_before_expiry(self) -> None:
        with pytest.raises(InvalidValidityWindowError):
            validate_draft(
                _draft(valid_from=NOW - timedelta(days=1), valid_to=NOW - timedelta(days=2)),
                NOW,
            )

    def test_valid_to_equal_now_is_expired(self) -> None:
        with pytest.raises(TicketExpiredError):
            validate_draft(_draft(valid_from=NOW - timedelta(hours=1), valid_to=NOW), NOW)

    def test_negative_cost(self) -> None:
        with pytest.raises(NegativeCostError):
            validate_draft(_draft(cost_cents=-1), NOW)

    def test_naive_datetimes_are_utc(self) -> None:
        naive_to = (NOW + timedelta(days=1)).replace(tzinfo=None)
        validate_draft(_draft(valid_from=naive_to, valid_to=naive_to), NOW)


class TestCheckPurchasable:
    def test_on_market_and_running(self) -> None:
        check_purchasable(_ticket(), NOW)

    def test_off_market(self) -> None:
        with pytest.raises(TicketOffMarketError):
            check_purchasable(_ticket(state=TicketState.OFF_MARKET), NOW)

    def test_ended_at_exact_valid_to(self) -> None:
        with pytest.raises(EventEndedError):
            check_purchasable(_ticket(valid_to=NOW), NOW)

    def test_off_market_reported_before_ended(self) -> None:
        with pytest.raises(TicketOffMarketError):
            check_purchasable(_ticket(state=TicketState.OFF_MARKET, valid_to=NOW), NOW)


class TestCheckBuyer:
    def test_self_purchase(self) -> None:
        with pytest.raises(SelfPurchaseError):
            check_buyer(_ticket(), _user("alice", 10**6), _user("alice", 10**6))

    def test_insufficient_balance(self) -> None:
        with pytest.raises(InsufficientBalanceError):
            check_buyer(_ticket(cost_cents=5000), _user("alice"), _user("bob", 4999))

    def test_exact_balance_is_enough(self) -> None:
        check_buyer(_ticket(cost_cents=5000), _user("alice"), _user("bob", 5000))


class TestSpecifications:
    def test_owned_by(self) -> None:
        spec = tickets_owned_by("alice")
        assert spec.is_satisfied_by(_ticket(state=TicketState.OFF_MARKET))
        assert not spec.is_satisfied_by(_ticket(user_id="bob"))

    def test_on_the_market_is_owner_scoped(self) -> None:
        spec = tickets_on_the_market("alice")
        assert spec.is_satisfied_by(_ticket())
        assert not spec.is_satisfied_by(_ticket(state=TicketState.OFF_MARKET))
        assert not spec.is_satisfied_by(_ticket(user_id="bob"))

    def test_for_sale_excludes_viewer_and_ended(self) -> None:
        spec = tickets_for_sale("bob", NOW)
        assert spec.is_satisfied_by(_ticket(user_id="alice"))
        assert not spec.is_satisfied_by(_ticket(user_id="bob"))
        assert not spec.is_satisfied_by(_ticket(valid_to=NOW))

    def test_empty_spec_matches_everything(self) -> None:
        assert TicketSpec().is_satisfied_by(_ticket(state=TicketState.OFF_MARKET))
