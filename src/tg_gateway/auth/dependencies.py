"""Bearer-token authentication for protected routers.

    @router.get("/tickets/mine")
    async def mine(user: Annotated[UserModel, Depends(get_current_user)]): ...
"""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.database import get_db_session
from src.tg_common.errors import AccountDisabledError, InvalidCredentialsError
from src.tg_gateway.auth.jwt_handler import TokenType, decode_token
from src.tg_gateway.user.db_models import UserModel

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """Resolve the token subject to an active user.

    401 for a missing, malformed, expired or orphaned token; 403
    (AccountDisabledError) when the user exists but is deactivated.
    """
    try:
        payload = decode_token(token, TokenType.ACCESS)
        user_id = uuid.UUID(payload.get("sub", ""))
    except (InvalidCredentialsError, ValueError):
        raise _unauthorized() from None

    user = await db.get(UserModel, user_id)
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise AccountDisabledError()
    return user
