"""Environment-driven defaults for nccs.

Loaded from environment variables with the ``NCCS_`` prefix (or a local
``.env`` file). Command-line options override these values.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nccs_core.models import DEFAULT_ADDRESS_VERSION


class NccsSettings(BaseSettings):
    """Defaults for the nccs CLI and programmatic entry points.

    Example:
        >>> # From environment
        >>> settings = NccsSettings()
        >>>
        >>> # Explicit
        >>> settings = NccsSettings(engine="neo_engine.service:Engine", log_level="DEBUG")
    """

    model_config = SettingsConfigDict(
        env_prefix="NCCS_",
        env_file=".env",
        extra="ignore",
    )

    engine: str | None = Field(
        default=None,
        description="Compilation engine reference (package.module:attribute)",
    )
    address_version: int = Field(
        default=DEFAULT_ADDRESS_VERSION,
        ge=0,
        le=255,
        description="Default network address version byte",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum log level",
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON",
    )
