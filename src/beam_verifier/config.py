"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (soracom_beam_shared_secret)
- In .env or ENV vars: UPPER_CASE (SORACOM_BEAM_SHARED_SECRET)
- Pydantic automatically converts between both

The Beam shared secret is not part of the cached Settings. It is read from
the process environment (never .env) on every verified request, see
load_shared_secret.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application configuration.

    All variables can be defined in:
    - .env file: VARIABLE_NAME=value
    - Environment variables: export VARIABLE_NAME=value

    Example:
        # In .env or as environment variable:
        SERVER_PORT=8080
        LOG_LEVEL=INFO
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allows using uppercase or lowercase
        extra="ignore",  # Ignores extra variables in .env
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(
        default="Beam Signature Verifier", description="Project name"
    )
    project_description: str = Field(
        default="Verifies SORACOM Beam signatures on forwarded device requests",
        description="Project description",
    )

    # ============================================================================
    # SERVER SETTINGS
    # ============================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("server_port", "port"),
        description="Server port (SERVER_PORT or PORT)",
    )
    debug: bool = Field(default=False, description="Debug mode")
    enable_docs: bool = Field(
        default=False, description="Enable API documentation (Swagger/ReDoc)"
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # BEAM SETTINGS
    # ============================================================================
    beam_exempt_paths: str = Field(
        default="/health,/docs,/redoc,/openapi.json",
        description="Paths that skip Beam signature verification (comma-separated)",
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    def get_beam_exempt_paths(self) -> set[str]:
        """
        Get the set of paths exempt from signature verification.

        Returns:
            set[str]: Exact request paths; empty entries are ignored.
        """
        return {
            path.strip() for path in self.beam_exempt_paths.split(",") if path.strip()
        }


class SharedSecretSettings(BaseSettings):
    """
    Shared secret configured in the SORACOM Beam console.

    Read from the process environment only, never from .env.
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    soracom_beam_shared_secret: str = Field(
        default="", description="Pre-shared key used to sign Beam requests"
    )


def load_shared_secret() -> str:
    """
    Read the Beam shared secret.

    Not cached: every call reads the environment again, so a rotated
    secret takes effect on the next request.

    Returns:
        str: The shared secret, empty if not configured.
    """
    return SharedSecretSettings().soracom_beam_shared_secret


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    This function is cached, so the .env file is only read once.
    To refresh the configuration, clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


# Global instance for modules configured at import time (logging)
settings = get_settings()
