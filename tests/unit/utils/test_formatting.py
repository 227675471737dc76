"""Unit tests for console and logging helpers."""

import io
import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from filebyte.core.theme import get_theme
from filebyte.utils import formatting
from filebyte.utils.formatting import LOGGER_NAME, configure_logging, set_color
from rich.console import Console
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "expected"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose: bool, quiet: bool, expected: int) -> None:
        """Verbosity flags select the package log level."""
        logger = configure_logging(verbose=verbose, quiet=quiet)
        assert logger.level == expected

    def test_single_rich_handler(self) -> None:
        """Repeated calls keep exactly one Rich handler."""
        configure_logging()
        logger = configure_logging(verbose=True)

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.propagate is False

    def test_child_loggers_inherit(self) -> None:
        """Module loggers under the package use the configured level."""
        configure_logging(quiet=True)
        assert logging.getLogger("filebyte.filesystem.traverser").getEffectiveLevel() == logging.ERROR


class TestSetColor:
    """Tests for set_color function."""

    def test_toggles_both_consoles(self) -> None:
        """Color is switched on stdout and stderr consoles together."""
        try:
            set_color(False)
            assert formatting.console.no_color is True
            assert formatting.err_console.no_color is True
        finally:
            set_color(True)
        assert formatting.console.no_color is False


class TestPrintHelpers:
    """Tests for print_* helpers."""

    def test_messages_are_plain_text(self) -> None:
        """Brackets in messages are printed literally."""
        buf = io.StringIO()
        test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)
        with (
            patch.object(formatting, "console", test_console),
            patch.object(formatting, "err_console", test_console),
        ):
            formatting.print_error("Path '/tmp/[red]x' does not exist")
            formatting.print_info("Exported 2 entries to /tmp/[b]out.json")

        output = buf.getvalue()
        assert "Error: Path '/tmp/[red]x' does not exist" in output
        assert "/tmp/[b]out.json" in output
