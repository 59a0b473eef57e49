from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request, status

from app.api.errors import ApiError
from app.dashboard.renderer import DashboardRenderer
from app.ratings.log import RatingLog
from app.tickets.service import TicketService


def _from_state(request: Request, name: str, label: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ApiError(status.HTTP_503_SERVICE_UNAVAILABLE, f"{label} is not configured")
    return value


async def get_ticket_service(request: Request) -> TicketService:
    return _from_state(request, "ticket_service", "Ticket service")


async def get_rating_log(request: Request) -> RatingLog:
    return _from_state(request, "rating_log", "Rating log")


async def get_dashboard_renderer(request: Request) -> DashboardRenderer:
    return _from_state(request, "dashboard_renderer", "Dashboard renderer")


TicketServiceDep = Annotated[TicketService, Depends(get_ticket_service)]
RatingLogDep = Annotated[RatingLog, Depends(get_rating_log)]
DashboardRendererDep = Annotated[DashboardRenderer, Depends(get_dashboard_renderer)]
