"""TicketApplicationService — marketplace rules around ticket ownership.

Write operations (import, buy, move) run as one unit of work: every effect is
applied on the request's session and committed together, or rolled back
together on the first error. Reads run without an explicit transaction.

Purchases are protected against double sale by the ticket version: the
ownership UPDATE only matches the version read during validation, and a miss
surfaces as TicketConflictError (HTTP 409).
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_account.domain.models import BalanceMovement
from src.tg_account.domain.repository import AccountRepositoryProtocol
from src.tg_account.infrastructure.persistence import AccountRepository
from src.tg_common.cents import cents_to_display
from src.tg_common.datetime_utils import ensure_utc, utc_now
from src.tg_common.enums import TicketState, TransferKind
from src.tg_common.errors import (
    MissingArgumentError,
    OwnerNotFoundError,
    TicketConflictError,
    TicketNotFoundError,
    TicketNotOwnedError,
    UserNotFoundError,
)
from src.tg_gateway.user.directory import UserDirectory, UserDirectoryProtocol
from src.tg_gateway.user.models import User
from src.tg_ticket.application.schemas import (
    PurchaseResponse,
    TicketListResponse,
    TicketResponse,
)
from src.tg_ticket.domain.models import Ticket, TicketDraft
from src.tg_ticket.domain.repository import TicketRepositoryProtocol
from src.tg_ticket.domain.rules import check_buyer, check_purchasable, validate_draft
from src.tg_ticket.domain.specifications import (
    tickets_for_sale,
    tickets_on_the_market,
    tickets_owned_by,
)
from src.tg_ticket.infrastructure.persistence import TicketRepository
from src.tg_transfer.application.schemas import TransferItem, TransferListResponse
from src.tg_transfer.application.service import TransferService

logger = logging.getLogger(__name__)


def _require(value: object, name: str) -> None:
    if value is None or value == "":
        raise MissingArgumentError(name)


class TicketApplicationService:
    def __init__(
        self,
        repo: TicketRepositoryProtocol | None = None,
        transfers: TransferService | None = None,
        users: UserDirectoryProtocol | None = None,
        accounts: AccountRepositoryProtocol | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo: TicketRepositoryProtocol = repo or TicketRepository()
        self._transfers = transfers or TransferService()
        self._users: UserDirectoryProtocol = users or UserDirectory()
        self._accounts: AccountRepositoryProtocol = accounts or AccountRepository()
        self._clock = clock

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _resolve_user(self, db: AsyncSession, username: str) -> User:
        user = await self._users.find_by_username(db, username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    async def _load_ticket(self, db: AsyncSession, ticket_id: str) -> Ticket:
        ticket = await self._repo.get_by_id(db, ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def import_ticket(
        self, db: AsyncSession, username: str, draft: TicketDraft | None
    ) -> TicketResponse:
        """Register an externally issued ticket under `username`.

        Writes an ORIGIN transfer (buyer and seller both the importer) and
        then the ticket row, in one transaction.
        """
        _require(username, "username")
        if draft is None:
            raise MissingArgumentError("draft")
        validate_draft(draft, self._clock())

        try:
            user = await self._resolve_user(db, username)
            ticket = Ticket(
                id=str(uuid.uuid4()),
                user_id=user.id,
                state=draft.state,
                valid_from=ensure_utc(draft.valid_from),
                valid_to=ensure_utc(draft.valid_to),
                event_name=draft.event_name,
                address=draft.address,
                cost_cents=draft.cost_cents,
            )
            await self._transfers.create(
                db, user.id, user.id, ticket.id, ticket.cost_cents, TransferKind.ORIGIN
            )
            stored = await self._repo.add(db, ticket)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Ticket %s imported by %s (%s, %s)",
            stored.id, username, stored.event_name, cents_to_display(stored.cost_cents),
        )
        return TicketResponse.from_domain(stored)

    async def buy(self, db: AsyncSession, username: str, ticket_id: str) -> PurchaseResponse:
        """Sell the ticket to `username` at its listed cost.

        Checks, in order: ticket exists, not off market, event not ended,
        owner exists, buyer exists, buyer is not the owner, buyer can pay.
        """
        _require(username, "username")
        _require(ticket_id, "ticket_id")

        try:
            ticket = await self._load_ticket(db, ticket_id)
            check_purchasable(ticket, self._clock())

            owner = await self._users.find_by_id(db, ticket.user_id)
            if owner is None:
                raise OwnerNotFoundError(ticket.user_id)
            buyer = await self._resolve_user(db, username)
            check_buyer(ticket, owner, buyer)

            sold = await self._repo.transfer_ownership(db, ticket.id, buyer.id, ticket.version)
            if sold is None:
                logger.warning(
                    "Purchase conflict on ticket %s (version %d) by %s",
                    ticket.id, ticket.version, username,
                )
                raise TicketConflictError(ticket.id)

            description = f"Ticket {ticket.id}: {ticket.event_name}"
            movements = (
                BalanceMovement.ticket_payment(buyer.id, ticket.cost_cents, ticket.id, description),
                BalanceMovement.ticket_receipt(owner.id, ticket.cost_cents, ticket.id, description),
            )
            # Lock account rows in user_id order: crossed purchases between the
            # same two users must not deadlock.
            balances: dict[str, int] = {}
            for movement in sorted(movements, key=lambda m: m.user_id):
                account, _ = await self._accounts.apply(db, movement)
                balances[movement.user_id] = account.balance
            transfer = await self._transfers.create(
                db, buyer.id, owner.id, ticket.id, ticket.cost_cents, TransferKind.SALE
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Ticket %s sold: %s -> %s for %s",
            ticket.id, owner.username, buyer.username, cents_to_display(ticket.cost_cents),
        )
        return PurchaseResponse(
            ticket=TicketResponse.from_domain(sold),
            transfer_id=transfer.id,
            paid_cents=ticket.cost_cents,
            paid_display=cents_to_display(ticket.cost_cents),
            balance_cents=balances[buyer.id],
            balance_display=cents_to_display(balances[buyer.id]),
        )

    async def move(
        self, db: AsyncSession, username: str, ticket_id: str, state: TicketState
    ) -> TicketResponse:
        """Put the caller's ticket into `state`. Any state may follow any other."""
        _require(username, "username")
        _require(ticket_id, "ticket_id")

        try:
            ticket = await self._load_ticket(db, ticket_id)
            user = await self._resolve_user(db, username)
            if ticket.user_id != user.id:
                raise TicketNotOwnedError(ticket.id)

            moved = await self._repo.update_state(db, ticket.id, state, ticket.version)
            if moved is None:
                raise TicketConflictError(ticket.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Ticket %s moved %s -> %s by %s", ticket.id, ticket.state.value, state.value, username)
        return TicketResponse.from_domain(moved)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_user_tickets(self, db: AsyncSession, username: str) -> TicketListResponse:
        _require(username, "username")
        user = await self._resolve_user(db, username)
        tickets = await self._repo.list(db, tickets_owned_by(user.id))
        return TicketListResponse.from_domain(tickets)

    async def get_tickets_on_the_market(
        self, db: AsyncSession, username: str
    ) -> TicketListResponse:
        _require(username, "username")
        user = await self._resolve_user(db, username)
        tickets = await self._repo.list(db, tickets_on_the_market(user.id))
        return TicketListResponse.from_domain(tickets)

    async def browse_market(self, db: AsyncSession, username: str) -> TicketListResponse:
        """Tickets `username` could buy right now."""
        _require(username, "username")
        user = await self._resolve_user(db, username)
        tickets = await self._repo.list(db, tickets_for_sale(user.id, self._clock()))
        return TicketListResponse.from_domain(tickets)

    async def get_ticket(self, db: AsyncSession, ticket_id: str) -> TicketResponse:
        _require(ticket_id, "ticket_id")
        return TicketResponse.from_domain(await self._load_ticket(db, ticket_id))

    async def get_transfers(self, db: AsyncSession, ticket_id: str) -> TransferListResponse:
        _require(ticket_id, "ticket_id")
        ticket = await self._load_ticket(db, ticket_id)
        transfers = await self._transfers.get_transfers(db, ticket.id)
        return TransferListResponse(
            ticket_id=ticket.id,
            items=[TransferItem.from_domain(t) for t in transfers],
        )
