"""tg_ticket REST endpoints. All require JWT authentication.

POST /tickets                        — import a ticket for the caller
GET  /tickets/mine                   — caller's tickets, any state
GET  /tickets/mine/on-market         — caller's tickets listed for sale
GET  /tickets/market                 — other users' tickets the caller can buy
GET  /tickets/{ticket_id}            — single ticket
POST /tickets/{ticket_id}/buy        — purchase at listed cost
POST /tickets/{ticket_id}/move       — owner changes the market state
GET  /tickets/{ticket_id}/transfers  — ownership/payment history
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.tg_common.database import get_db_session
from src.tg_common.response import ApiResponse, respond
from src.tg_gateway.auth.dependencies import get_current_user
from src.tg_gateway.user.db_models import UserModel
from src.tg_ticket.application.schemas import TicketImportRequest, TicketMoveRequest
from src.tg_ticket.application.service import TicketApplicationService

router = APIRouter(prefix="/tickets", tags=["tickets"])

_service = TicketApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def import_ticket(
    body: TicketImportRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.import_ticket(db, current_user.username, body.to_draft())
    return respond(request, result.model_dump(mode="json"), "Ticket imported")


@router.get("/mine")
async def list_my_tickets(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_user_tickets(db, current_user.username)
    return respond(request, result.model_dump(mode="json"))


@router.get("/mine/on-market")
async def list_my_tickets_on_market(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_tickets_on_the_market(db, current_user.username)
    return respond(request, result.model_dump(mode="json"))


@router.get("/market")
async def browse_market(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.browse_market(db, current_user.username)
    return respond(request, result.model_dump(mode="json"))


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_ticket(db, ticket_id)
    return respond(request, result.model_dump(mode="json"))


@router.post("/{ticket_id}/buy")
async def buy_ticket(
    ticket_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.buy(db, current_user.username, ticket_id)
    return respond(request, result.model_dump(mode="json"), "Ticket purchased")


@router.post("/{ticket_id}/move")
async def move_ticket(
    ticket_id: str,
    body: TicketMoveRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.move(db, current_user.username, ticket_id, body.state)
    return respond(request, result.model_dump(mode="json"))


@router.get("/{ticket_id}/transfers")
async def list_transfers(
    ticket_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_transfers(db, ticket_id)
    return respond(request, result.model_dump(mode="json"))
