"""Tests for stash.core.utils.logging."""

import os
import sys

import pytest
from loguru import logger

from stash.core.config_schema import LoggingSettings, StashSettings
from stash.core.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestLoggingSettings:
    def test_defaults(self):
        settings = StashSettings().logging
        assert settings.level == "WARNING"
        assert settings.file is None

    def test_level_normalized(self):
        assert LoggingSettings.model_validate({"level": " info "}).level == "INFO"

    def test_file_expanded(self):
        settings = LoggingSettings.model_validate({"file": "~/stash.log"})
        assert settings.file == settings.file.expanduser()
        assert settings.file.name == "stash.log"

    def test_blank_file_disabled(self):
        assert LoggingSettings.model_validate({"file": ""}).file is None


class TestSetupLogging:
    def test_writes_log_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "logs", "stash.log")
        setup_logging(LoggingSettings.model_validate({"level": "INFO", "file": path}))
        logger.info("entry saved")
        logger.debug("hidden")
        logger.remove()

        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "entry saved" in content
        assert "hidden" not in content

    def test_verbose_lowers_level(self, tmp_dir):
        path = os.path.join(tmp_dir, "stash.log")
        setup_logging(LoggingSettings.model_validate({"level": "ERROR", "file": path}), verbose=True)
        logger.debug("details")
        logger.remove()

        with open(path, encoding="utf-8") as f:
            assert "details" in f.read()

    def test_stderr_only_by_default(self, capsys):
        setup_logging()
        logger.warning("careful")
        logger.info("quiet")
        err = capsys.readouterr().err
        assert "careful" in err
        assert "quiet" not in err
