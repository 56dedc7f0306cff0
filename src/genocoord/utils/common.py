"""Pipeline utilities shared between commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.progress import (BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn,
                           TimeRemainingColumn)


def setup_output_directory(output_path: Path, logger: logging.Logger = None) -> None:
    """Create the parent directory of output_path if it doesn't exist."""
    output_dir = output_path.parent
    if not output_dir.exists():
        output_dir.mkdir(parents=True)
        if logger:
            logger.info(f"Created output directory: {output_dir}")


def make_progress() -> Progress:
    """Progress bar layout used by all commands."""
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(complete_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn()
    )
