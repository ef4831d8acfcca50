"""UserService — registration, login and token refresh.

register() is a unit of work of its own: the users row and its zero-balance
accounts row are committed together.
"""

import logging
import uuid

from sqlalchemy import or_, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UsernameExistsError,
)
from src.tg_gateway.auth.jwt_handler import (
    TokenType,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.tg_gateway.auth.password import hash_password, verify_password
from src.tg_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)

_OPEN_ACCOUNT_SQL = text("INSERT INTO accounts (user_id, balance, version) VALUES (:user_id, 0, 0)")


def _duplicate_error(exc: IntegrityError) -> UsernameExistsError | EmailExistsError:
    if "uq_users_email" in str(exc.orig):
        return EmailExistsError()
    return UsernameExistsError()


class UserService:
    async def register(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
        name: str,
        surname: str,
        phone_number: str,
    ) -> UserModel:
        """Create the user and its account. Duplicate username or email is a 409.

        The pre-check covers the common case; a concurrent registration that
        slips past it is caught by the unique constraints on flush.
        """
        try:
            result = await db.execute(
                select(UserModel.username, UserModel.email).where(
                    or_(UserModel.username == username, UserModel.email == email)
                )
            )
            taken = result.fetchall()
            if any(row.username == username for row in taken):
                raise UsernameExistsError()
            if taken:
                raise EmailExistsError()

            user = UserModel(
                username=username,
                email=email,
                name=name,
                surname=surname,
                phone_number=phone_number,
                password_hash=hash_password(password),
                is_active=True,
            )
            db.add(user)
            try:
                await db.flush()  # populates user.id and created_at
            except IntegrityError as exc:
                raise _duplicate_error(exc) from None
            await db.execute(_OPEN_ACCOUNT_SQL, {"user_id": str(user.id)})
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Registered user %s (%s)", username, user.id)
        return user

    async def login(
        self, db: AsyncSession, username: str, password: str
    ) -> tuple[UserModel, str, str]:
        """Return (user, access_token, refresh_token).

        Unknown usernames and wrong passwords fail identically.
        """
        result = await db.execute(select(UserModel).where(UserModel.username == username))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDisabledError()

        user_id = str(user.id)
        return user, create_access_token(user_id), create_refresh_token(user_id)

    async def refresh(self, db: AsyncSession, refresh_token: str) -> str:
        """Trade a refresh token for a new access token while the user is still active."""
        claims = decode_token(refresh_token, TokenType.REFRESH)
        try:
            user_id = uuid.UUID(claims.get("sub", ""))
        except ValueError:
            raise InvalidRefreshTokenError() from None

        user = await db.get(UserModel, user_id)
        if user is None:
            raise InvalidRefreshTokenError()
        if not user.is_active:
            raise AccountDisabledError()
        return create_access_token(str(user.id))
