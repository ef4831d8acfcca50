"""/auth endpoints — the only routes reachable without a Bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tg_common.database import get_db_session
from src.tg_common.datetime_utils import to_iso
from src.tg_common.response import ApiResponse, respond
from src.tg_gateway.user.db_models import UserModel
from src.tg_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from src.tg_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])

_service = UserService()
_ACCESS_TTL_SECONDS = settings.JWT_EXPIRE_MINUTES * 60

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def _user_info(user: UserModel) -> UserInfo:
    return UserInfo(
        user_id=str(user.id),
        username=user.username,
        email=user.email,
        name=user.name,
        surname=user.surname,
        phone_number=user.phone_number,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request, db: DbSession) -> ApiResponse:
    user = await _service.register(
        db, body.username, body.email, body.password,
        body.name, body.surname, body.phone_number,
    )
    data = RegisterResponse(
        **_user_info(user).model_dump(),
        created_at=to_iso(user.created_at) or "",
    )
    return respond(request, data.model_dump(), "User registered successfully")


@router.post("/login")
async def login(body: LoginRequest, request: Request, db: DbSession) -> ApiResponse:
    user, access_token, refresh_token = await _service.login(db, body.username, body.password)
    data = LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=_ACCESS_TTL_SECONDS,
        user=_user_info(user),
    )
    return respond(request, data.model_dump(), "Login successful")


@router.post("/refresh")
async def refresh(body: RefreshRequest, request: Request, db: DbSession) -> ApiResponse:
    access_token = await _service.refresh(db, body.refresh_token)
    data = RefreshResponse(access_token=access_token, expires_in=_ACCESS_TTL_SECONDS)
    return respond(request, data.model_dump(), "Token refreshed")
