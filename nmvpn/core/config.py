"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nmvpn.core.exceptions import ConfigurationError
from nmvpn.core.models import EXPORT_SUFFIX, MenuCapabilities


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are prefixed with NMVPN_.
    For example: NMVPN_DEBUG=true, NMVPN_NMCLI_BINARY=/usr/bin/nmcli
    """

    # Application settings
    debug: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # Backend
    nmcli_binary: str = "nmcli"
    import_type: str = "openvpn"
    export_with_sudo: bool = True
    export_suffix: str = EXPORT_SUFFIX

    # Menu features
    supports_export: bool = True
    selection_lists: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NMVPN_",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(valid_levels)}")
        return v

    @field_validator("nmcli_binary", "import_type")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value must not be empty")
        return v

    @field_validator("export_suffix")
    @classmethod
    def validate_export_suffix(cls, v: str) -> str:
        """Validate export file extension."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("Export suffix must look like '.ovpn'")
        return v

    @property
    def capabilities(self) -> MenuCapabilities:
        """Menu feature set derived from the settings."""
        return MenuCapabilities(
            supports_export=self.supports_export,
            supports_selection_lists=self.selection_lists,
        )


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Args:
        **overrides: Values taking precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If any value is invalid
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={
                ".".join(str(part) for part in err["loc"]): err["msg"]
                for err in e.errors()
            },
        ) from e
