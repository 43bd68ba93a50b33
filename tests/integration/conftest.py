"""Pytest configuration and fixtures for integration tests."""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.config_loader import ConfigLoader


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Remove override variables and skip .env loading for every test."""
    monkeypatch.setenv("COLUMNS", "300")
    for env_var in ConfigLoader.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    with patch('src.config.config_loader.load_dotenv'):
        yield


@pytest.fixture
def config_file(tmp_path) -> Path:
    """YAML config with a small size limit and line breaks disabled by default."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "max_html_length: 200\n"
        "cors_origins:\n"
        "  - http://app.test\n"
        "default_options:\n"
        "  preserve_line_breaks: false\n",
        encoding="utf-8",
    )
    return path
