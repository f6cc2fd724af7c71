"""Rich console that mirrors terminal output into the debug log

With --debug the sign-in transcript (prompts, progress steps, result table)
lands in the same file as the library's log records, as plain text.
"""

import logging
from typing import Optional

from rich.console import Console

CONSOLE_LOGGER_NAME = "mc_auth.console"


class DebugCapturingConsole(Console):
    """Console that records each print and forwards it to a logger"""

    def __init__(self, debug_logger: logging.Logger, **kwargs):
        kwargs["record"] = True
        super().__init__(**kwargs)
        self.debug_logger = debug_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        # export_text drops markup; clear so the next print starts empty
        text = self.export_text(clear=True).rstrip()
        if text and self.debug_logger.isEnabledFor(logging.DEBUG):
            self.debug_logger.debug(f"[CONSOLE] {text}")


def open_console_log(log_file: str) -> logging.Logger:
    """Return the console transcript logger, writing only to log_file"""
    console_logger = logging.getLogger(CONSOLE_LOGGER_NAME)
    console_logger.setLevel(logging.DEBUG)
    for handler in list(console_logger.handlers):
        console_logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
    console_logger.addHandler(handler)
    # The root logger may write to the same file
    console_logger.propagate = False
    return console_logger


def create_console(debug_logger: Optional[logging.Logger] = None) -> Console:
    """Plain Console, or a DebugCapturingConsole when a transcript logger is given"""
    if debug_logger is None:
        return Console()
    return DebugCapturingConsole(debug_logger)
