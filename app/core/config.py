from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration read from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = Field(default="Mining Ticket Service")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s %(levelname)s %(name)s %(message)s")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Public URL the owner dashboard is served from
    base_url: str = Field(default="http://localhost:3000")
    cors_origins: tuple[str, ...] = Field(default=("*",))

    # Branding used in emails and the dashboard
    service_name: str = Field(default="Evans Mining Service")
    operator_name: str = Field(default="Evan")
    server_name: str = Field(default="Donut SMP")

    # Notification configuration
    operator_email: str | None = Field(default=None)
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587)
    smtp_use_tls: bool = Field(default=True)
    smtp_email: str | None = Field(default=None)
    smtp_password: str | None = Field(default=None)
    smtp_timeout: float = Field(default=10.0)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="mining-tickets")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_email and self.smtp_password)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()
