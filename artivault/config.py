"""Vault configuration — env-driven via pydantic-settings.

Reads from a .env file and ARTIVAULT_* environment variables.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from artivault.core.validators import ValidationPolicy


class VaultConfig(BaseSettings):
    """Runtime configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export ARTIVAULT_ENVIRONMENT=staging
        export ARTIVAULT_LOG_LEVEL=DEBUG
        export ARTIVAULT_DB_PATH=/data/vault.db

    Or via .env file::

        ARTIVAULT_ENVIRONMENT=production
        ARTIVAULT_REQUIRE_HEX_HASH=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTIVAULT_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    backend: Literal["sqlite", "memory"] = "sqlite"
    db_path: Path = Path(".artivault/vault.db")

    # Block-height clock
    height_interval_seconds: int = 600
    genesis: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)

    # Validation strictness (can only tighten the baseline validators)
    require_hex_hash: bool = False
    reject_blank_text: bool = False

    # Audit
    journal_enabled: bool = True

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    def validation_policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            require_hex_hash=self.require_hex_hash,
            reject_blank_text=self.reject_blank_text,
        )


# Module-level singleton — import as `from artivault.config import config`
config = VaultConfig()
