import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.routes import dashboard, health, ratings, tickets
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging, init_tracer, shutdown_tracer
from app.dashboard.renderer import DashboardRenderer
from app.notifications.gateway import SmtpNotificationGateway
from app.notifications.messages import NotificationComposer
from app.ratings.log import RatingLog
from app.tickets.repository import TicketRepository
from app.tickets.service import TicketService


def build_ticket_service(settings: Settings) -> TicketService:
    gateway = SmtpNotificationGateway(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_email,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )
    composer = NotificationComposer(
        service_name=settings.service_name,
        operator_name=settings.operator_name,
        server_name=settings.server_name,
        operator_email=settings.operator_email,
    )
    return TicketService(
        repository=TicketRepository(),
        gateway=gateway,
        composer=composer,
        base_url=settings.base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger = configure_logging(settings)
    tracer_provider = init_tracer(settings)

    if not settings.smtp_configured:
        logger.warning("SMTP credentials are not set; ticket emails will fail until they are configured")
    if not settings.operator_email:
        logger.warning("OPERATOR_EMAIL is not set; new-ticket alerts will not be sent")

    app.state.logger = logger
    app.state.ticket_service = build_ticket_service(settings)
    app.state.rating_log = RatingLog()
    app.state.dashboard_renderer = DashboardRenderer(service_name=settings.service_name)
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        shutdown_tracer(tracer_provider)
        logging.getLogger(__name__).info("%s stopped", settings.app_name)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(tickets.router)
    app.include_router(ratings.router)
    app.include_router(dashboard.router)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual entry point
    import uvicorn

    _settings = get_settings()
    uvicorn.run(app, host=_settings.host, port=_settings.port)
