"""UserDirectory — the identity provider consulted by the ticket service.

Resolves usernames and ids to a User joined with its account balance.
Lookups return None for unknown users; callers decide which error to raise.
"""

from typing import Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_gateway.user.models import User

_SELECT_USER = """
    SELECT u.id, u.username, u.is_active, COALESCE(a.balance, 0) AS balance
    FROM users u
    LEFT JOIN accounts a ON a.user_id = CAST(u.id AS TEXT)
"""

_FIND_BY_USERNAME_SQL = text(_SELECT_USER + " WHERE u.username = :username")

# users.id is UUID; compare as text so malformed ids simply miss
_FIND_BY_ID_SQL = text(_SELECT_USER + " WHERE CAST(u.id AS TEXT) = :user_id")


class UserDirectoryProtocol(Protocol):
    async def find_by_username(self, db: AsyncSession, username: str) -> User | None: ...

    async def find_by_id(self, db: AsyncSession, user_id: str) -> User | None: ...


def _row_to_user(row: object) -> User:
    return User(
        id=str(row.id),  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        is_active=row.is_active,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
    )


class UserDirectory:
    async def find_by_username(self, db: AsyncSession, username: str) -> User | None:
        result = await db.execute(_FIND_BY_USERNAME_SQL, {"username": username})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def find_by_id(self, db: AsyncSession, user_id: str) -> User | None:
        result = await db.execute(_FIND_BY_ID_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_user(row) if row else None
