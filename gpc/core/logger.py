"""Unified logging for gpc with console and optional file output."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER = "gpc"

# Track if file logging has been set up
_file_logging_configured = False


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
    """Set up file logging for a gpc run.

    Args:
        log_file: Path to log file. Nothing is set up when omitted.
        verbose: Enable debug-level logging in the file

    Returns:
        The log file path, or None when file logging is not enabled.

    Note:
        Creates the log directory if it doesn't exist.
    """
    global _file_logging_configured

    if not log_file:
        return None

    target_log_file = Path(log_file).expanduser()
    if _file_logging_configured:
        return target_log_file

    target_log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER)
    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Detailed format for file logs
    file_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    _file_logging_configured = True

    root_logger.info(f"gpc logging initialized: {target_log_file}")
    return target_log_file


def set_verbose(verbose: bool) -> None:
    """Switch the gpc loggers between INFO and DEBUG."""
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger with a Rich console handler. The level is inherited from the
        ``gpc`` root logger so ``set_verbose`` applies everywhere.
    """
    logger = logging.getLogger(name)

    # Only add console handler if not already present
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    root_logger = logging.getLogger(ROOT_LOGGER)
    if root_logger.level == logging.NOTSET:
        root_logger.setLevel(logging.INFO)

    return logger
