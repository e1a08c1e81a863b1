"""Tests for settings and the budget document loader."""

import pytest
from pathlib import Path

from budget.config import ConfigReadError, LedgerSettings, get_settings, load_budget_document


class TestLedgerSettings:
    """Tests for environment-driven settings."""

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BUDGET_DB_PATH", str(tmp_path / "env.db"))
        monkeypatch.setenv("BUDGET_DEFAULT_MAX_AMOUNT", "500")
        settings = LedgerSettings()
        assert settings.db_path == tmp_path / "env.db"
        assert settings.default_max_amount == 500

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BUDGET_DEFAULT_MIN_AMOUNT", raising=False)
        monkeypatch.delenv("BUDGET_DEFAULT_MAX_AMOUNT", raising=False)
        settings = LedgerSettings()
        assert settings.default_min_amount == 0
        assert settings.default_max_amount == 100000

    def test_user_home_is_expanded(self):
        settings = LedgerSettings(db_path="~/ledger.db")
        assert settings.db_path == Path.home() / "ledger.db"

    def test_log_level_normalized(self):
        assert LedgerSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError):
            LedgerSettings(log_level="chatty")

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestLoadBudgetDocument:
    """Tests for reading the YAML budget document."""

    def test_loads_document(self, budget_file):
        doc = load_budget_document(budget_file)
        assert doc.income == 300000
        assert [c.name for c in doc.categories] == ["food", "car", "rent"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigReadError, match="file not found"):
            load_budget_document(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("income: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigReadError, match="invalid YAML"):
            load_budget_document(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigReadError, match="expected a mapping"):
            load_budget_document(path)

    def test_schema_errors_are_reported(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text(
            "income: lots\ncategories-planned:\n  - name: car\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigReadError) as exc_info:
            load_budget_document(path)
        message = str(exc_info.value)
        assert "income" in message
        assert "amount" in message
        assert exc_info.value.path == str(path)

    def test_amount_beyond_64_bits_is_reported(self, tmp_path):
        path = tmp_path / "huge.yaml"
        path.write_text(
            "income: 1\ncategories-planned:\n  - name: car\n    amount: 100000000000000000000\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigReadError, match="amount"):
            load_budget_document(path)
