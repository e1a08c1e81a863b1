"""
Configuration Management for the Budget Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
File locations (ledger database, budget document) are resolved once
and injected into every command, instead of each command working out
its own paths.

Two kinds of configuration live here:
1. LedgerSettings - where things are and runtime knobs (BUDGET_* env vars)
2. The budget document - a YAML file with income and planned categories,
   read by `create` through load_budget_document()
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from budget.errors import LedgerError
from budget.models.ledger import BudgetDocument


DEFAULT_HOME = Path.home() / ".budget"


class ConfigReadError(LedgerError):
    """The budget document is missing or malformed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not read budget config {self.path}: {reason}")


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Locations
    db_path: Path = Field(
        default=DEFAULT_HOME / "budget.db",
        description="SQLite ledger database file"
    )
    config_path: Path = Field(
        default=DEFAULT_HOME / "config.yaml",
        description="YAML budget document used by `create`"
    )

    # Filter defaults
    default_min_amount: int = Field(
        default=0,
        description="Lower amount bound when `filter --min` is not given"
    )
    default_max_amount: int = Field(
        default=100000,
        description="Upper amount bound when `filter --max` is not given"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for structured log output"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console text"
    )

    @field_validator('db_path', 'config_path', mode='after')
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Allow `~` in paths coming from the environment."""
        return v.expanduser()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()


def load_budget_document(path: Optional[Union[str, Path]] = None) -> BudgetDocument:
    """
    Read and validate the YAML budget document.

    Args:
        path: Document location. Defaults to the configured config_path.

    Returns:
        The validated BudgetDocument

    Raises:
        ConfigReadError: If the file is missing, is not valid YAML,
                         or does not match the expected schema
    """
    path = Path(path) if path is not None else get_settings().config_path

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigReadError(path, "file not found")
    except OSError as e:
        raise ConfigReadError(path, str(e))

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigReadError(path, f"invalid YAML: {e}")

    if not isinstance(data, dict):
        raise ConfigReadError(path, "expected a mapping with 'income' and 'categories-planned'")

    try:
        return BudgetDocument.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'document'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigReadError(path, problems)
