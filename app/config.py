"""
Configuration module using Pydantic Settings for environment variable management.

Only the worker secret, port and timing knobs are exposed. The settings object
is built once and injected into the services at app construction.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.

    All values can be overridden from the environment (or a local .env file).
    """

    # Application
    app_name: str = "Cre8 Video Worker"
    log_level: str = "INFO"
    port: int = 5000

    # Security - shared secret for inbound requests
    worker_secret: Optional[str] = None
    # Optional secret for HMAC-signing outgoing webhook bodies
    webhook_signing_secret: Optional[str] = None

    # Outbound webhook
    webhook_timeout_seconds: float = 10.0

    # Simulated processing timings
    stage_delay_seconds: float = 2.0
    export_delay_seconds: float = 3.0
    finalize_delay_seconds: float = 2.0

    @property
    def user_agent(self) -> str:
        return "Cre8-Video-Worker/1.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
