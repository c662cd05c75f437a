"""
Tests for the component logging system.

Tests cover:
- Logger creation by component name and by explicit name
- Color lookup from configuration with defaults
- Message formatting and level delegation
"""

import logging

import pytest
from rich.logging import RichHandler

from mdagen.utils.logger import DEFAULT_COLORS, ComponentLogger, get_logger, set_log_level


class TestComponentLoggerBasic:
    """Test basic ComponentLogger functionality."""

    def test_logger_creation(self):
        logger = get_logger("pipeline")

        assert isinstance(logger, ComponentLogger)
        assert logger.component_name == "pipeline"
        assert logger.base_logger is logging.getLogger("pipeline")

    def test_logger_creation_with_custom_params(self):
        """Test custom logger creation with explicit parameters."""
        logger = get_logger(name="custom_logger", color="blue")

        assert logger.component_name == "custom_logger"
        assert logger.color == "blue"

    def test_component_name_required(self):
        with pytest.raises(ValueError, match="Component name is required"):
            get_logger()

    def test_default_colors(self):
        assert get_logger("renderer").color == DEFAULT_COLORS["renderer"]
        assert get_logger("something_else").color == "white"

    def test_color_from_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mdagen.yml").write_text("logging:\n  logging_colors:\n    pipeline: red\n")

        assert get_logger("pipeline").color == "red"

    def test_basic_logging_methods(self):
        """Test that all logging methods work without crashing."""
        logger = get_logger("test_component")

        logger.status("Status message")
        logger.key_info("Key info message")
        logger.info("Info message")
        logger.debug("Debug message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.success("Success message")
        logger.timing("Timing message")
        logger.critical("Critical message")

    def test_rich_handler_installed_once(self):
        get_logger("a")
        get_logger("b")

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1


class TestComponentLoggerDelegation:
    """Test delegation to the underlying logger."""

    def test_messages_reach_base_logger(self, caplog):
        logger = get_logger("pipeline")

        with caplog.at_level(logging.INFO, logger="pipeline"):
            logger.info("Rendering Model.py.j2")
            logger.warning("No templates")

        messages = [record.getMessage() for record in caplog.records if record.name == "pipeline"]
        assert any("Rendering Model.py.j2" in m for m in messages)
        assert any("No templates" in m for m in messages)

    def test_levels(self):
        logger = get_logger(name="level_test")
        logger.setLevel(logging.WARNING)

        assert logger.level == logging.WARNING
        assert logger.isEnabledFor(logging.ERROR)
        assert not logger.isEnabledFor(logging.INFO)
        assert logger.name == "level_test"

    def test_set_log_level(self):
        root = logging.getLogger()
        original = root.level
        try:
            set_log_level(logging.DEBUG)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(original)
