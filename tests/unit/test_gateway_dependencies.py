"""Unit tests for the get_current_user dependency."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from src.tg_common.errors import AccountDisabledError
from src.tg_gateway.auth.dependencies import get_current_user
from src.tg_gateway.auth.jwt_handler import create_access_token, create_refresh_token
from src.tg_gateway.user.db_models import UserModel


def _user(is_active: bool = True) -> UserModel:
    user = UserModel()
    user.id = uuid.uuid4()
    user.username = "alice"
    user.is_active = is_active
    return user


def _db_returning(user: UserModel | None) -> MagicMock:
    db = MagicMock()
    db.get = AsyncMock(return_value=user)
    return db


async def test_resolves_token_subject() -> None:
    user = _user()
    db = _db_returning(user)

    resolved = await get_current_user(create_access_token(str(user.id)), db)

    assert resolved is user
    assert db.get.call_args.args == (UserModel, user.id)


async def test_refresh_token_rejected() -> None:
    user = _user()
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(create_refresh_token(str(user.id)), _db_returning(user))
    assert exc_info.value.status_code == 401


async def test_non_uuid_subject_rejected() -> None:
    db = _db_returning(None)
    with pytest.raises(HTTPException):
        await get_current_user(create_access_token("not-a-uuid"), db)
    db.get.assert_not_awaited()


async def test_deleted_user_rejected() -> None:
    with pytest.raises(HTTPException):
        await get_current_user(create_access_token(str(uuid.uuid4())), _db_returning(None))


async def test_disabled_user() -> None:
    user = _user(is_active=False)
    with pytest.raises(AccountDisabledError):
        await get_current_user(create_access_token(str(user.id)), _db_returning(user))
