"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.

Writes that change an existing ticket take the version the caller read and
return None when the row moved on in the meantime.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.enums import TicketState
from src.tg_ticket.domain.models import Ticket
from src.tg_ticket.domain.specifications import TicketSpec


class TicketRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, ticket_id: str) -> Ticket | None: ...

    async def add(self, db: AsyncSession, ticket: Ticket) -> Ticket: ...

    async def list(
        self, db: AsyncSession, spec: TicketSpec | None = None
    ) -> list[Ticket]: ...

    async def update_state(
        self,
        db: AsyncSession,
        ticket_id: str,
        state: TicketState,
        expected_version: int,
    ) -> Ticket | None: ...

    async def transfer_ownership(
        self,
        db: AsyncSession,
        ticket_id: str,
        new_owner_id: str,
        expected_version: int,
    ) -> Ticket | None: ...
