"""Environment-sourced settings for forgekit.

Every ``FORGEKIT_*`` variable is read here through pydantic-settings:

========================  =============================================
``FORGEKIT_LOG_LEVEL``    log threshold name (overrides the manifest)
``FORGEKIT_DEBUG``        print every record regardless of level
``FORGEKIT_SHOW_TRACE``   append the context record to each line
``FORGEKIT_PRINT_BANNER`` print the startup banner (default on)
``FORGEKIT_MANIFEST``     manifest file to load instead of the bundled one
========================  =============================================

Unset and blank variables count as absent.  ``None`` on the log fields
means "use the manifest value".
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from forgekit.exceptions import ConfigError

ENV_PREFIX: str = "FORGEKIT_"


class ForgeKitSettings(BaseSettings):
    """Process settings read from ``FORGEKIT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    log_level: str | None = None
    debug: bool | None = None
    show_trace: bool | None = None
    print_banner: bool = True
    manifest: Path | None = None


def load_settings() -> ForgeKitSettings:
    """Read the environment now.

    Raises
    ------
    ConfigError
        If a variable holds a value of the wrong type, e.g.
        ``FORGEKIT_DEBUG=maybe``.
    """
    try:
        return ForgeKitSettings()
    except ValidationError as exc:
        names = ", ".join(
            ENV_PREFIX + str(error["loc"][0]).upper() for error in exc.errors()
        )
        raise ConfigError(
            f"Invalid environment setting: {names}",
            hint="Booleans accept true/false, 1/0, yes/no or on/off.",
        ) from exc


@lru_cache()
def get_settings() -> ForgeKitSettings:
    """Get cached settings instance."""
    return load_settings()
