from __future__ import annotations

import pytest
from pydantic import ValidationError

from mathapi.core.config import AppSettings


def clear_env(monkeypatch) -> None:
    for name in ("CORS_ORIGINS", "HOST", "PORT", "MCP_SERVER_NAME", "NORMALIZER_MAX_PASSES"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    clear_env(monkeypatch)

    settings = AppSettings(_env_file=None)

    assert settings.port == 3000
    assert settings.service_name == "mcp-math-api"
    assert settings.resolved_cors_origins == ["*"]
    assert settings.normalizer_max_passes == 64


def test_resolved_cors_origins_deduplicates(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv(
        "CORS_ORIGINS",
        '["https://calc.example.com/", "https://calc.example.com", "http://localhost:5173"]',
    )

    settings = AppSettings(_env_file=None)

    assert settings.resolved_cors_origins == ["https://calc.example.com", "http://localhost:5173"]


def test_environment_overrides(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("MCP_SERVER_NAME", "custom-math")
    monkeypatch.setenv("PORT", "8081")

    settings = AppSettings(_env_file=None)

    assert settings.mcp_server_name == "custom-math"
    assert settings.port == 8081


def test_pass_limit_must_be_positive(monkeypatch) -> None:
    clear_env(monkeypatch)

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, normalizer_max_passes=0)
