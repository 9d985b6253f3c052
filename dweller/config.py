"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DwellerSettings(BaseSettings):
    """Indexing options loaded from ``DWELLER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DWELLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Vault
    vault_path: Path | None = None
    config_folder: str = ".obsidian"
    include_config_folder: bool = False
    note_extension: str = "md"

    # Abort the whole build on the first unreadable entry
    strict: bool = False

    log_level: str = "INFO"

    @field_validator("vault_path")
    @classmethod
    def validate_vault_path(cls, v: Path | None) -> Path | None:
        """Ensure vault path exists and is a directory."""
        if v is None:
            return v
        if not v.exists():
            raise ValueError(f"Vault path does not exist: {v}")
        if not v.is_dir():
            raise ValueError(f"Vault path is not a directory: {v}")
        return v.resolve()

    @field_validator("note_extension")
    @classmethod
    def strip_extension_dot(cls, v: str) -> str:
        return v.lstrip(".")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings(**overrides) -> DwellerSettings:
    """Load settings from environment, with explicit overrides on top."""
    return DwellerSettings(**overrides)
