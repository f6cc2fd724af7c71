"""Shared utilities package for mc-oauth"""

from .debug_console import (
    CONSOLE_LOGGER_NAME,
    DebugCapturingConsole,
    create_console,
    open_console_log,
)

__all__ = [
    "CONSOLE_LOGGER_NAME",
    "DebugCapturingConsole",
    "create_console",
    "open_console_log",
]
