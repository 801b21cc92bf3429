"""
Tests for logging setup.
"""

import logging

import pytest
from loguru import logger

from aot_monitor.core.logging_utils import InterceptHandler, LoggerMixin, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()
    logging.getLogger().handlers.clear()


class Component(LoggerMixin):
    def __init__(self, config):
        super().__init__()
        self.config = config


class TestLogging:
    """Test stdlib-to-loguru routing and logger helpers."""

    def test_stdlib_records_reach_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "monitor.log"
        setup_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("aot_monitor.test").warning("refresh failed for test")
        logger.complete()

        assert any(isinstance(h, InterceptHandler) for h in logging.getLogger().handlers)
        assert "refresh failed for test" in log_file.read_text()
        assert "aot_monitor.test" in log_file.read_text()

    def test_level_filters_file_sink(self, tmp_path):
        log_file = tmp_path / "monitor.log"
        setup_logging(level="WARNING", log_file=str(log_file))

        logging.getLogger("quiet").info("not written")
        logging.getLogger("loud").error("written")

        text = log_file.read_text()
        assert "written" in text
        assert "not written" not in text

    def test_get_logger_level_override(self):
        log = get_logger("aot_monitor.level_test", {"level": "debug"})

        assert log.level == logging.DEBUG

    def test_mixin_uses_class_name(self):
        component = Component({"logging": {"level": "ERROR"}})

        assert component.logger.name == "Component"
        assert component.logger.level == logging.ERROR
