"""
Clean Terminal UI System
Leveled, component-tagged console output used by the logging handler
"""
import logging
from typing import Optional
from enum import Enum
from rich.console import Console
from rich.text import Text
import sys


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class TerminalUI:
    """Clean terminal interface without emojis"""

    def __init__(self):
        self.console = Console(file=sys.stdout, force_terminal=True)
        self._setup_colors()

    def _setup_colors(self):
        self.colors = {
            LogLevel.DEBUG: "dim cyan",
            LogLevel.INFO: "white",
            LogLevel.SUCCESS: "green",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red"
        }

        self.prefixes = {
            LogLevel.DEBUG: "[DEBUG]",
            LogLevel.INFO: "[INFO]",
            LogLevel.SUCCESS: "[SUCCESS]",
            LogLevel.WARNING: "[WARNING]",
            LogLevel.ERROR: "[ERROR]"
        }

    def log(self, message: str, level: LogLevel = LogLevel.INFO, component: Optional[str] = None):
        """Log a message with clean formatting"""
        prefix = self.prefixes[level]
        color = self.colors[level]

        if component:
            formatted_message = f"{prefix} [{component}] {message}"
        else:
            formatted_message = f"{prefix} {message}"

        text = Text(formatted_message, style=color)
        self.console.print(text)

    def debug(self, message: str, component: Optional[str] = None):
        """Debug level message"""
        self.log(message, LogLevel.DEBUG, component)

    def info(self, message: str, component: Optional[str] = None):
        """Info level message"""
        self.log(message, LogLevel.INFO, component)

    def success(self, message: str, component: Optional[str] = None):
        self.log(message, LogLevel.SUCCESS, component)

    def warning(self, message: str, component: Optional[str] = None):
        """Warning level message"""
        self.log(message, LogLevel.WARNING, component)

    def error(self, message: str, component: Optional[str] = None):
        """Error level message"""
        self.log(message, LogLevel.ERROR, component)


# Global instance
ui = TerminalUI()


class TerminalUIHandler(logging.Handler):
    """Custom logging handler that uses TerminalUI"""

    def __init__(self):
        super().__init__()
        self.ui = ui

    def emit(self, record):
        try:
            level_map = {
                logging.DEBUG: LogLevel.DEBUG,
                logging.INFO: LogLevel.INFO,
                logging.WARNING: LogLevel.WARNING,
                logging.ERROR: LogLevel.ERROR,
                logging.CRITICAL: LogLevel.ERROR
            }

            level = level_map.get(record.levelno, LogLevel.INFO)
            component = None
            if record.name != "root":
                # app.services.project.service -> services.project.service
                component = record.name.removeprefix("app.")

            message = record.getMessage()
            if record.exc_info:
                message = f"{message}\n{logging.Formatter().formatException(record.exc_info)}"

            self.ui.log(message, level, component)
        except Exception:
            self.handleError(record)
