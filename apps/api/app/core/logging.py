import logging
import sys
from app.core.config import settings
from app.core.terminal_ui import TerminalUIHandler


def configure_logging() -> None:
    """Configure logging with clean terminal UI"""
    root = logging.getLogger()
    root.handlers.clear()

    terminal_handler = TerminalUIHandler()
    terminal_handler.setLevel(settings.log_level.upper())

    stream_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.DEBUG)

    root.setLevel(settings.log_level.upper())
    root.addHandler(terminal_handler)

    # Plain stream handler only in debug mode
    if settings.debug:
        root.addHandler(stream_handler)

    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
