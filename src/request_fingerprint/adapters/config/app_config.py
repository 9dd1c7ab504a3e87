"""12-factor configuration adapter using environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8080, description="Port to bind the server to")
    log_level: str = Field(
        default="info",
        description="Log level for application and uvicorn logging",
    )

    # Client address resolution
    trust_proxy_headers: bool = Field(
        default=True,
        description=(
            "Resolve the client address from X-Forwarded-For / X-Real-IP before the peer "
            "address. These headers are not authenticated; disable when the server is "
            "reachable without a trusted proxy in front of it"
        ),
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level name."""
        if v.lower() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v.lower()
