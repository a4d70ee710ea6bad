"""Shared test fixtures for stash."""

import os
import tempfile

import pytest


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def journal_path(tmp_dir):
    """Path to a journal file that does not exist yet."""
    return os.path.join(tmp_dir, "stash.txt")


@pytest.fixture
def tmp_config_file(tmp_dir, journal_path):
    """Create a temporary YAML config file pointing at a temp journal."""
    import yaml

    config_data = {
        "journal": {"path": journal_path},
        "ai": {
            "provider": "anthropic",
            "models": {"anthropic": "claude-test"},
            "language": "pt-BR",
            "timezone": "America/Sao_Paulo",
        },
        "reminders": {"timeout": 2},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def _clean_stash_env(monkeypatch):
    """Keep the developer's own STASH_* / provider key variables out of tests."""
    for key in list(os.environ):
        if key.startswith("STASH_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("GOOGLE_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(key, raising=False)
