from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse

from app.dependencies.tickets import DashboardRendererDep, TicketServiceDep
from app.tickets.repository import TicketNotFoundError

router = APIRouter(tags=["dashboard"])


def _token_from_query(request: Request) -> str | None:
    """Owner links carry the token as a bare key (``/ticket?<token>``)."""

    params = request.query_params
    if params.get("token"):
        return params["token"]
    for key in params.keys():
        if key:
            return key
    return None


@router.get("/ticket", response_class=HTMLResponse)
async def view_ticket(
    request: Request,
    service: TicketServiceDep,
    renderer: DashboardRendererDep,
) -> HTMLResponse:
    token = _token_from_query(request)
    if token is None:
        return HTMLResponse(renderer.render_error("Invalid ticket link"), status_code=status.HTTP_400_BAD_REQUEST)
    try:
        ticket = service.resolve_owner_token(token)
    except TicketNotFoundError:
        return HTMLResponse(renderer.render_error("Ticket not found or expired"), status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(renderer.render_ticket(ticket))
