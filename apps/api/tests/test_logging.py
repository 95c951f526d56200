import logging
from unittest.mock import MagicMock

import pytest

from app.core.logging import configure_logging
from app.core.terminal_ui import LogLevel, TerminalUI, TerminalUIHandler


def test_configure_logging_installs_terminal_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging()
        assert any(isinstance(h, TerminalUIHandler) for h in root.handlers)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_handler_labels_records_with_module_component():
    handler = TerminalUIHandler()
    handler.ui = MagicMock()
    record = logging.LogRecord(
        "app.services.project.service", logging.INFO, __file__, 1, "Created project %s", ("abc",), None
    )

    handler.emit(record)

    handler.ui.log.assert_called_once_with("Created project abc", LogLevel.INFO, "services.project.service")


def test_handler_maps_critical_to_error():
    handler = TerminalUIHandler()
    handler.ui = MagicMock()
    record = logging.LogRecord("root", logging.CRITICAL, __file__, 1, "boom", None, None)

    handler.emit(record)

    handler.ui.log.assert_called_once_with("boom", LogLevel.ERROR, None)


@pytest.mark.parametrize("method, level", [
    ("debug", LogLevel.DEBUG),
    ("info", LogLevel.INFO),
    ("success", LogLevel.SUCCESS),
    ("warning", LogLevel.WARNING),
    ("error", LogLevel.ERROR),
])
def test_ui_level_methods_print_prefixed_component(method, level):
    terminal = TerminalUI()
    terminal.console = MagicMock()

    getattr(terminal, method)("wrote .env", "EnvManager")

    printed = terminal.console.print.call_args.args[0]
    assert printed.plain == f"{terminal.prefixes[level]} [EnvManager] wrote .env"
    assert printed.style == terminal.colors[level]


def test_ui_without_component_omits_label():
    terminal = TerminalUI()
    terminal.console = MagicMock()

    terminal.warning("disk almost full")

    assert terminal.console.print.call_args.args[0].plain == "[WARNING] disk almost full"
