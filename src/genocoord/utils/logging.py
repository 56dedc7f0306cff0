"""Logging setup for genocoord commands."""

import logging
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def log_file_path(log_dir: Path, command_name: str) -> Path:
    """Timestamped log file for one run of command_name, e.g. 20240101T120000.filter-reads.log"""
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return log_dir / f"{timestamp}.{command_name}.log"


def setup_file_logging(log_dir: Path, command_name: str, debug: bool = False, console_output: bool = False) -> logging.Logger:
    """Send all log records to a timestamped file in log_dir, and optionally to the console.

    Args:
        log_dir: Directory to write log files to (created if missing)
        command_name: Name of the command being run (e.g., 'filter-reads')
        debug: Whether to enable debug logging
        console_output: Whether to also log to the console through rich

    Returns:
        The 'genocoord' logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_file_path(log_dir, command_name)
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    if console_output:
        console_handler = RichHandler(level=level, show_path=False)
        root_logger.addHandler(console_handler)

    logger = logging.getLogger('genocoord')
    logger.info(f"Logging {command_name} to {log_file}")
    return logger
