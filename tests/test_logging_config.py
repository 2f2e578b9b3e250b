"""
Tests for logging setup and formatters.
"""

import logging

import pytest

from i3finder.errors import ParseError
from i3finder.logging_config import (
    ColoredFormatter,
    FinderFormatter,
    log_finder_error,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("i3finder")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def make_record(message="boom", level=logging.INFO, **extra):
    record = logging.LogRecord("i3finder.test", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Error code suffix and colors."""

    def test_plain_record_unchanged(self):
        assert FinderFormatter("%(message)s").format(make_record()) == "boom"

    def test_error_code_and_context_appended(self):
        record = make_record(error_code="PARSE_ERROR", error_context={"source": "x"})
        assert FinderFormatter("%(message)s").format(record) == "boom [PARSE_ERROR] {'source': 'x'}"

    def test_error_code_without_context(self):
        record = make_record(error_code="PARSE_ERROR", error_context={})
        assert FinderFormatter("%(message)s").format(record) == "boom [PARSE_ERROR]"

    def test_colored_formatter_restores_levelname(self):
        record = make_record(level=logging.WARNING)
        text = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[33mWARNING\033[0m" in text
        assert record.levelname == "WARNING"


class TestSetupLogging:
    """Console and file handlers."""

    @pytest.mark.parametrize(
        "kwargs, level",
        [({}, logging.WARNING), ({"verbose": True}, logging.INFO), ({"debug": True}, logging.DEBUG)],
    )
    def test_console_levels(self, kwargs, level):
        logger = setup_logging(**kwargs)
        assert logger.level == level
        assert len(logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging(verbose=True)
        assert len(logger.handlers) == 1

    def test_log_file_gets_info_while_console_stays_quiet(self, tmp_path):
        log_file = tmp_path / "logs" / "i3finder.log"
        logger = setup_logging(log_file=log_file)

        logging.getLogger("i3finder.test").info("picked term")
        log_finder_error(ParseError("get_tree reply", "nodes: Field required"), logger)
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "picked term" in text
        assert "[PARSE_ERROR]" in text
        assert logger.handlers[0].level == logging.WARNING

    def test_log_file_follows_debug(self, tmp_path):
        log_file = tmp_path / "i3finder.log"
        setup_logging(debug=True, log_file=log_file)
        logging.getLogger("i3finder.test").debug("tree flattened")
        assert "tree flattened" in log_file.read_text()
