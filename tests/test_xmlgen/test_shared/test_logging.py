"""Tests for correlation-aware logging."""

import logging

from xmlgen.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test CorrelationLogger behaviour."""

    def test_component_defaults_to_last_name_segment(self) -> None:
        logger = get_logger("xmlgen.tree.serializer")
        assert logger.component == "serializer"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog) -> None:
        """Test that extra fields reach the log record."""
        caplog.set_level(logging.DEBUG, logger="xmlgen.test")
        logger = get_logger("xmlgen.test", "req-42", "unit")

        logger.info("hello", extra={"elements": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-42"
        assert record.elements == 3

    def test_bind_adds_context(self, caplog) -> None:
        """Test that bound context is merged into every record."""
        caplog.set_level(logging.DEBUG, logger="xmlgen.test")
        base = get_logger("xmlgen.test", "req-1", "unit")
        bound = base.bind(root="Foo")

        bound.warning("bound message")

        assert isinstance(bound, CorrelationLogger)
        assert bound.context == {"root": "Foo"}
        assert base.context == {}
        assert caplog.records[-1].root == "Foo"
        assert caplog.records[-1].correlation_id == "req-1"

    def test_disabled_level_is_skipped(self, caplog) -> None:
        """Test that records below the effective level are not emitted."""
        caplog.set_level(logging.WARNING, logger="xmlgen.test")
        logger = get_logger("xmlgen.test")

        logger.debug("quiet")

        assert not logger.is_enabled_for(logging.DEBUG)
        assert all(record.getMessage() != "quiet" for record in caplog.records)

    def test_error_without_traceback(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="xmlgen.test")
        get_logger("xmlgen.test").error("failed", exc_info=False)
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert not record.exc_info
