"""Configuration parsing tests."""

import pytest
from pydantic import ValidationError

from taxengine.core.config import Settings


def test_defaults() -> None:
    """Settings work with no environment at all."""
    cfg = Settings(_env_file=None)
    assert cfg.default_tax_year == 2025
    assert cfg.round_to_whole_dollars is False
    assert cfg.log_format is None


def test_log_format_is_case_insensitive(monkeypatch) -> None:
    """LOG_FORMAT accepts any case and normalizes it."""
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    cfg = Settings(_env_file=None)
    assert cfg.log_format == "json"


def test_blank_log_format_means_by_environment(monkeypatch) -> None:
    """An empty LOG_FORMAT falls back to the environment default."""
    monkeypatch.setenv("LOG_FORMAT", "  ")
    cfg = Settings(_env_file=None)
    assert cfg.log_format is None


def test_log_format_rejects_unknown_value(monkeypatch) -> None:
    """Invalid values fail with a clear validation error."""
    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError, match="LOG_FORMAT"):
        Settings(_env_file=None)


def test_round_to_whole_dollars_from_env(monkeypatch) -> None:
    """Boolean flags parse from environment strings."""
    monkeypatch.setenv("ROUND_TO_WHOLE_DOLLARS", "true")
    monkeypatch.setenv("DEFAULT_TAX_YEAR", "2025")
    cfg = Settings(_env_file=None)
    assert cfg.round_to_whole_dollars is True
    assert cfg.default_tax_year == 2025
