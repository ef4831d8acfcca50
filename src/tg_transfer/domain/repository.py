"""Transfer repository Protocol — append-only store keyed by ticket."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_transfer.domain.models import Transfer


class TransferRepositoryProtocol(Protocol):
    async def append(self, db: AsyncSession, transfer: Transfer) -> Transfer: ...

    async def list_by_ticket(self, db: AsyncSession, ticket_id: str) -> list[Transfer]: ...
