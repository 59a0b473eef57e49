from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings, get_settings
from app.core.logging import init_tracer, logging_config, parse_otlp_headers
from app.main import build_ticket_service, create_app
from app.notifications.gateway import SmtpNotificationGateway


@pytest.fixture
def clean_settings(monkeypatch):
    for name in ("SMTP_EMAIL", "SMTP_PASSWORD", "OPERATOR_EMAIL", "BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_environment(monkeypatch, clean_settings):
    monkeypatch.setenv("BASE_URL", "https://evans.example.com")
    monkeypatch.setenv("SMTP_EMAIL", "bot@example.com")
    monkeypatch.setenv("SMTP_PASSWORD", "app-password")

    settings = get_settings()

    assert settings.base_url == "https://evans.example.com"
    assert settings.smtp_configured


def test_build_ticket_service_wires_settings(clean_settings):
    settings = Settings(base_url="https://evans.example.com/", operator_email="owner@example.com")

    service = build_ticket_service(settings)

    assert isinstance(service.gateway, SmtpNotificationGateway)
    assert not service.gateway.configured
    assert service.composer.operator_email == "owner@example.com"
    assert service.owner_link("abc").startswith("https://evans.example.com/ticket?")


def test_lifespan_builds_stores(clean_settings):
    with TestClient(create_app()) as client:
        assert client.get("/api/health").json() == {"status": "ok", "tickets": 0}
        assert client.get("/api/ratings").json()["total"] == 0


def test_routes_without_lifespan_report_unconfigured_service():
    response = TestClient(create_app()).get("/api/health")
    assert response.status_code == 503
    assert response.json() == {"success": False, "error": "Ticket service is not configured"}


def test_tracer_disabled_by_default():
    assert init_tracer(Settings()) is None


def test_parse_otlp_headers_skips_malformed_items():
    assert parse_otlp_headers("api-key=abc, ,broken,x-team = ops") == {"api-key": "abc", "x-team": "ops"}
    assert parse_otlp_headers(None) == {}


def test_logging_config_falls_back_to_info_for_unknown_level():
    config = logging_config(Settings(log_level="chatty", environment="production"))

    assert config["root"]["level"] == "INFO"
    assert config["loggers"]["app"]["level"] == "INFO"
    assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"


def test_logging_config_uses_configured_level():
    config = logging_config(Settings(log_level="debug"))

    assert config["loggers"]["app"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn.access"]["level"] == "INFO"
