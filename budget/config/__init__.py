"""Configuration package."""

from budget.config.settings import (
    ConfigReadError,
    LedgerSettings,
    get_settings,
    load_budget_document,
)

__all__ = [
    "ConfigReadError",
    "LedgerSettings",
    "get_settings",
    "load_budget_document",
]
