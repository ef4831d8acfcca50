"""TransferService — append-only audit of ticket ownership/payment events.

create() never commits: it runs inside whichever transaction the ticket
service opened, so a transfer exists only if the ownership change does.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.enums import TransferKind
from src.tg_common.errors import TransferTicketRequiredError
from src.tg_transfer.domain.models import Transfer
from src.tg_transfer.domain.repository import TransferRepositoryProtocol
from src.tg_transfer.infrastructure.persistence import TransferRepository

logger = logging.getLogger(__name__)


class TransferService:
    def __init__(self, repo: TransferRepositoryProtocol | None = None) -> None:
        self._repo: TransferRepositoryProtocol = repo or TransferRepository()

    async def create(
        self,
        db: AsyncSession,
        buyer_id: str,
        seller_id: str | None,
        ticket_id: str,
        cost_cents: int,
        kind: TransferKind = TransferKind.SALE,
    ) -> Transfer:
        if not ticket_id:
            raise TransferTicketRequiredError()
        transfer = Transfer(
            id=str(uuid.uuid4()),
            ticket_id=ticket_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            cost_cents=cost_cents,
            kind=kind.value,
        )
        stored = await self._repo.append(db, transfer)
        logger.debug(
            "Transfer %s recorded: ticket=%s kind=%s buyer=%s seller=%s cost=%d",
            stored.id, ticket_id, kind.value, buyer_id, seller_id, cost_cents,
        )
        return stored

    async def get_transfers(self, db: AsyncSession, ticket_id: str) -> list[Transfer]:
        return await self._repo.list_by_ticket(db, ticket_id)
