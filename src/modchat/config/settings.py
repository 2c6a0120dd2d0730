"""
Configuration settings for modchat.

This module provides configuration management using Pydantic settings
with support for environment variables and .env files.
"""

from typing import Dict, Any
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.errors import ConfigurationError


class ModchatSettings(BaseSettings):
    """
    Main configuration settings for modchat.

    Settings are loaded from multiple sources in order of preference:
    1. Environment variables (prefixed with MODCHAT_)
    2. .env file in the working directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="MODCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Command Configuration
    command_name: str = Field(
        default="ribbit",
        description="Chat command word that reaches the mod manager"
    )

    nick: str = Field(
        default="modchat",
        description="Bot nickname shown in rendered help"
    )

    # Repository Configuration
    mod_prefix: str = Field(
        default="toady-",
        description="Namespace prefix of mod keys in search results"
    )

    catalog_path: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "modchat" / "catalog.json",
        description="JSON catalog used by the local repository client"
    )

    state_dir: Path = Field(
        default_factory=lambda: Path.home() / ".cache" / "modchat",
        description="Directory holding installed-mod state"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @field_validator("command_name")
    @classmethod
    def validate_command_name(cls, v: str) -> str:
        """Validate command name is a single word."""
        v = v.strip().lower()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError(f"Invalid command name '{v}'. Use a single word.")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    def ensure_directories(self) -> None:
        """Ensure catalog and state directories exist.

        Raises:
            ConfigurationError: If a directory cannot be created
        """
        for config_field, directory in (
            ("catalog_path", self.catalog_path.parent),
            ("state_dir", self.state_dir),
        ):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot create directory for {config_field}: {directory} ({e.strerror or e})",
                    config_field=config_field,
                    original_error=e,
                ) from e

    @property
    def installed_file_path(self) -> Path:
        """Path to the installed-mods state file."""
        return self.state_dir / "installed.json"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug flag."""
        return "DEBUG" if self.debug else self.log_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a plain dictionary."""
        data = self.model_dump()
        data["catalog_path"] = str(self.catalog_path)
        data["state_dir"] = str(self.state_dir)
        return data
