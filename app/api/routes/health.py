from fastapi import APIRouter

from app.dependencies.tickets import TicketServiceDep

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", summary="Liveness probe with the number of stored tickets")
async def health(service: TicketServiceDep) -> dict[str, object]:
    return {"status": "ok", "tickets": service.count()}
