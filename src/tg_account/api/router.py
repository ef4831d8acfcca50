"""/account endpoints — the caller's own balance and ledger. JWT required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_account.application.schemas import AmountRequest
from src.tg_account.application.service import AccountApplicationService
from src.tg_common.database import get_db_session
from src.tg_common.enums import LedgerEntryType
from src.tg_common.response import ApiResponse, respond
from src.tg_gateway.auth.dependencies import get_current_user
from src.tg_gateway.user.db_models import UserModel

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()

CurrentUser = Annotated[UserModel, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/balance")
async def get_balance(request: Request, user: CurrentUser, db: DbSession) -> ApiResponse:
    result = await _service.get_balance(db, str(user.id))
    return respond(request, result.model_dump())


@router.post("/deposit")
async def deposit(
    body: AmountRequest, request: Request, user: CurrentUser, db: DbSession
) -> ApiResponse:
    result = await _service.deposit(db, str(user.id), body.amount_cents)
    return respond(request, result.model_dump(), "Deposit accepted")


@router.post("/withdraw")
async def withdraw(
    body: AmountRequest, request: Request, user: CurrentUser, db: DbSession
) -> ApiResponse:
    result = await _service.withdraw(db, str(user.id), body.amount_cents)
    return respond(request, result.model_dump(), "Withdrawal accepted")


@router.get("/ledger")
async def list_ledger(
    request: Request,
    user: CurrentUser,
    db: DbSession,
    cursor: Annotated[str | None, Query(description="Opaque cursor from the previous page")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    entry_type: LedgerEntryType | None = None,
) -> ApiResponse:
    result = await _service.list_ledger(
        db, str(user.id), cursor, limit, entry_type.value if entry_type else None
    )
    return respond(request, result.model_dump())
