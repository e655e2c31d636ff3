"""Tests for configuration settings."""

import pytest

from prompt_refiner.config import Settings


def test_default_settings() -> None:
    """Test that default settings are correctly set."""
    settings = Settings()

    # Convergence cutoffs
    assert settings.INTENT_CUTOFF == 95
    assert settings.PROMPT_CUTOFF == 95
    assert settings.MAX_TURNS == 10
    assert settings.MAX_QUESTIONS_PER_TURN == 2
    assert settings.MAX_PROMPT_LENGTH == 500

    # Output contract
    assert settings.CONFIG_VERSION == "pc-0.3"
    assert settings.PROMPT_LANGUAGE == "ko"

    # LLM draft rewrite is opt-in
    assert settings.LLM_MODEL == "gpt-4o-mini"
    assert settings.USE_LLM_DRAFT is False

    # Relay targets
    assert settings.MCP_IMAGE_MODEL == "Nanobanana"
    assert settings.MCP_VIDEO_MODEL == "Pika"
    assert settings.MCP_DEV_MODEL == "Claude"

    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that settings can be loaded from environment variables."""
    monkeypatch.setenv("INTENT_CUTOFF", "80")
    monkeypatch.setenv("MAX_TURNS", "3")
    monkeypatch.setenv("USE_LLM_DRAFT", "true")
    monkeypatch.setenv("TEMPERATURE", "0.5")
    monkeypatch.setenv("MCP_DEV_ENDPOINT", "http://localhost:9000/mcp")

    settings = Settings()

    assert settings.INTENT_CUTOFF == 80
    assert settings.MAX_TURNS == 3
    assert settings.USE_LLM_DRAFT is True
    assert settings.TEMPERATURE == 0.5
    assert settings.MCP_DEV_ENDPOINT == "http://localhost:9000/mcp"


def test_case_insensitive_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables are case insensitive."""
    monkeypatch.setenv("prompt_cutoff", "90")
    monkeypatch.setenv("API_PORT", "9100")

    settings = Settings()

    assert settings.PROMPT_CUTOFF == 90
    assert settings.api_port == 9100


def test_invalid_type_conversion(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that invalid type conversions raise appropriate errors."""
    monkeypatch.setenv("MAX_PROMPT_LENGTH", "not_a_number")

    with pytest.raises(ValueError):
        Settings()


def test_only_korean_output_is_supported() -> None:
    with pytest.raises(ValueError):
        Settings(PROMPT_LANGUAGE="en")  # type: ignore[arg-type]


def test_settings_singleton_import() -> None:
    """Test that the singleton settings instance can be imported."""
    from prompt_refiner.config import settings

    assert isinstance(settings, Settings)
    assert settings.CONFIG_VERSION == "pc-0.3"
