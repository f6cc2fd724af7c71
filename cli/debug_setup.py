"""Logging and console setup for the CLI"""

import logging
import os

from rich.console import Console

from utils.debug_console import create_console, open_console_log

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(debug: bool, log_level: str, log_file: str) -> Console:
    """
    Configure the root logger and return the console the CLI prints to.

    Normal runs keep stderr quiet: WARNING, or LOG_LEVEL when it is stricter.
    Debug runs log everything to stderr and log_file, and the returned
    console copies its output into log_file too.

    Args:
        debug: --debug was given
        log_level: Configured LOG_LEVEL name
        log_file: Debug log file path
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    root.addHandler(stderr_handler)

    if not debug:
        root.setLevel(max(_parse_level(log_level), logging.WARNING))
        return create_console()

    root.setLevel(logging.DEBUG)
    log_path = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # Connection-level chatter from httpx's transport
    logging.getLogger("httpcore").setLevel(logging.INFO)

    console = create_console(open_console_log(log_path))
    logger.info(f"Debug logging to {log_path}")
    return console
