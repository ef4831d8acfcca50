"""JWT issue/verify (python-jose, HS256 with the shared JWT_SECRET).

Two token kinds share one format and differ only in the `type` claim and
lifetime. Tokens are not revocable; they stay valid until `exp`.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from jose import JWTError, jwt

from config.settings import settings
from src.tg_common.errors import AppError, InvalidCredentialsError, InvalidRefreshTokenError


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


_ALGORITHM = settings.JWT_ALGORITHM
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_REFRESH_EXPIRE = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)


def _lifetime(token_type: TokenType) -> timedelta:
    return _ACCESS_EXPIRE if token_type is TokenType.ACCESS else _REFRESH_EXPIRE


def _rejection(token_type: TokenType) -> AppError:
    if token_type is TokenType.ACCESS:
        return InvalidCredentialsError()
    return InvalidRefreshTokenError()


def issue_token(user_id: str, token_type: TokenType) -> str:
    issued_at = datetime.now(UTC)
    claims = {
        "sub": user_id,
        "type": token_type.value,
        "iat": issued_at,
        "exp": issued_at + _lifetime(token_type),
    }
    return str(jwt.encode(claims, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(user_id: str) -> str:
    return issue_token(user_id, TokenType.ACCESS)


def create_refresh_token(user_id: str) -> str:
    return issue_token(user_id, TokenType.REFRESH)


def decode_token(token: str, expected_type: TokenType | str) -> dict[str, str]:
    """Verify signature, expiry and kind; return the claims.

    A refresh token is never accepted where an access token is expected, and
    vice versa. Failures raise InvalidCredentialsError for access tokens and
    InvalidRefreshTokenError for refresh tokens.
    """
    token_type = TokenType(expected_type)
    try:
        claims: dict[str, str] = jwt.decode(token, settings.JWT_SECRET, algorithms=[_ALGORITHM])
    except JWTError:
        raise _rejection(token_type) from None
    if claims.get("type") != token_type.value:
        raise _rejection(token_type)
    return claims
