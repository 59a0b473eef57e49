from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.dashboard.renderer import DashboardRenderer
from app.dependencies import tickets as ticket_deps
from app.main import create_app
from app.notifications.gateway import Notification, NotificationError
from app.notifications.messages import NotificationComposer
from app.ratings.log import RatingLog
from app.tickets.repository import TicketRepository
from app.tickets.service import TicketService

BASE_URL = "https://tickets.example.com"
OPERATOR_EMAIL = "owner@example.com"


class RecordingGateway:
    """Gateway double that keeps every notification it is asked to send."""

    def __init__(self) -> None:
        self.sent: list[Notification] = []
        self.fail = False

    async def send(self, notification: Notification) -> None:
        if self.fail:
            raise NotificationError("smtp unavailable")
        self.sent.append(notification)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def composer() -> NotificationComposer:
    return NotificationComposer(
        service_name="Evans Mining Service",
        operator_name="Evan",
        server_name="Donut SMP",
        operator_email=OPERATOR_EMAIL,
    )


@pytest.fixture
def repository() -> TicketRepository:
    return TicketRepository()


@pytest.fixture
def service(repository, gateway, composer) -> TicketService:
    return TicketService(repository=repository, gateway=gateway, composer=composer, base_url=BASE_URL)


@pytest.fixture
def rating_log() -> RatingLog:
    return RatingLog()


@pytest.fixture
def client(service, rating_log):
    app = create_app()
    renderer = DashboardRenderer(service_name="Evans Mining Service")

    async def override_service():
        return service

    async def override_ratings():
        return rating_log

    async def override_renderer():
        return renderer

    app.dependency_overrides[ticket_deps.get_ticket_service] = override_service
    app.dependency_overrides[ticket_deps.get_rating_log] = override_ratings
    app.dependency_overrides[ticket_deps.get_dashboard_renderer] = override_renderer

    test_client = TestClient(app)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()
