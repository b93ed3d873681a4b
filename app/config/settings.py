from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Real transcription jobs run for several minutes; never wait less than 11.
DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 11 * 60
MIN_UPSTREAM_TIMEOUT_SECONDS = 11 * 60


class SttProxyConfig(BaseSettings):
    """Upstream speech-to-text service configuration."""

    api_endpoint: Optional[str] = Field(
        default=None,
        description="URL of the upstream STT service receiving forwarded uploads.",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
        description="Total wall-clock budget for a single upstream call.",
    )

    @field_validator("api_endpoint")
    @classmethod
    def _blank_endpoint_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("timeout_seconds")
    @classmethod
    def _timeout_at_least_eleven_minutes(cls, value: float) -> float:
        if value < MIN_UPSTREAM_TIMEOUT_SECONDS:
            raise ValueError(
                f"timeout_seconds must be at least {MIN_UPSTREAM_TIMEOUT_SECONDS} seconds"
            )
        return value

    model_config = SettingsConfigDict(
        env_prefix="STT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "STT Proxy Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"

    # Upstream STT
    stt: SttProxyConfig = Field(default_factory=SttProxyConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def get_stt_config() -> SttProxyConfig:
    """Read the upstream configuration fresh from the environment."""

    return SttProxyConfig()


# Global settings instance
settings = Settings()
