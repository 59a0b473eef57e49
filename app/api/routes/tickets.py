from __future__ import annotations

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from app.api.errors import ApiError
from app.dependencies.tickets import TicketServiceDep
from app.notifications.gateway import NotificationError
from app.tickets.repository import TicketAlreadyCompleteError, TicketNotFoundError
from app.tickets.service import TicketValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ticket", tags=["tickets"])


class TicketCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    platform: str | None = None
    area_size: str | None = Field(default=None, alias="areaSize")
    email: str | None = None


class TicketMessageRequest(BaseModel):
    message: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str | None = None


@router.post("", response_model=SuccessResponse, response_model_exclude_none=True)
async def create_ticket(payload: TicketCreateRequest, service: TicketServiceDep) -> SuccessResponse:
    try:
        await service.create_ticket(
            username=payload.username,
            platform=payload.platform,
            area_size=payload.area_size,
            email=payload.email,
        )
    except TicketValidationError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    except NotificationError as exc:
        logger.exception("Error creating ticket")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create ticket", str(exc)) from exc
    return SuccessResponse(message="Ticket created and confirmation sent!")


@router.post("/{ticket_id}/message", response_model=SuccessResponse, response_model_exclude_none=True)
async def send_message(ticket_id: str, payload: TicketMessageRequest, service: TicketServiceDep) -> SuccessResponse:
    try:
        await service.send_operator_message(ticket_id, payload.message)
    except TicketNotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Ticket not found") from exc
    except (TicketAlreadyCompleteError, TicketValidationError) as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    except NotificationError as exc:
        logger.exception("Send message error")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send message", str(exc)) from exc
    return SuccessResponse()


@router.post("/{ticket_id}/complete", response_model=SuccessResponse, response_model_exclude_none=True)
async def complete_ticket(ticket_id: str, service: TicketServiceDep) -> SuccessResponse:
    try:
        await service.complete_ticket(ticket_id)
    except TicketNotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Ticket not found") from exc
    except NotificationError as exc:
        logger.exception("Complete ticket error")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to complete ticket", str(exc)) from exc
    return SuccessResponse()
