"""Environment-bound configuration objects.

Pydantic BaseSettings classes that load from environment variables and an
optional ``.env`` file. Only the runtime and the CLI read settings; the
orchestrator core receives everything through its constructor.

Example:
    from chainAgent.config.settings import get_settings

    settings = get_settings()  # Cached singleton
    timeout = settings.cli.timeout_seconds
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


class CliSettings(BaseSettings):
    """Copilot CLI invocation settings.

    - binary: CLI executable (COPILOT_CLI_BINARY, default: copilot)
    - timeout_seconds: per-attempt timeout (COPILOT_CLI_TIMEOUT, default: 300)
    - retries: extra attempts after a timeout (COPILOT_CLI_RETRIES, default: 1)
    """

    binary: str = Field(default="copilot", alias="COPILOT_CLI_BINARY")
    timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        validation_alias=AliasChoices("COPILOT_CLI_TIMEOUT", "COPILOT_CLI_TIMEOUT_SECONDS"),
    )
    retries: int = Field(default=1, ge=0, le=10, alias="COPILOT_CLI_RETRIES")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class SelectionSettings(BaseSettings):
    """Automatic capability selection limits."""

    max_selected: int = Field(default=2, ge=1, le=20, alias="CHAIN_MAX_SELECTED")
    fallback_count: int = Field(default=3, ge=0, le=20, alias="CHAIN_FALLBACK_COUNT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Root application settings.

    Nested groups:
    - cli: Copilot CLI invocation (CliSettings)
    - selection: automatic selection limits (SelectionSettings)
    """

    repo_root: Path = Field(default=Path("."), alias="REPO_ROOT")
    agents_dir: Path = Field(default=Path(".github") / "agents", alias="AGENTS_DIR")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    log_dir: Optional[Path] = Field(default=None, alias="LOG_DIR")
    cli: CliSettings = Field(default_factory=CliSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    @property
    def agents_path(self) -> Path:
        """Definitions directory resolved against ``repo_root``."""
        if self.agents_dir.is_absolute():
            return self.agents_dir
        return self.repo_root / self.agents_dir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    return Settings()
