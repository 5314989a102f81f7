"""Utility functions for zwift_today."""

import logging
from datetime import date
from pathlib import Path

from .exceptions import OutputError

logger = logging.getLogger(__name__)


def today_iso() -> str:
    """Return today's local date as YYYY-MM-DD."""
    return date.today().isoformat()


def write_workout_file(data: bytes, output_path: Path) -> Path:
    """Write downloaded workout bytes to output_path.

    Any existing file is truncated and replaced in a single write. There
    is no temp-file-and-rename step, so a failure part way through can
    leave a truncated file behind.

    Args:
        data: Raw workout file content
        output_path: Destination file

    Returns:
        The path written

    Raises:
        OutputError: If the file cannot be created or written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        logger.error(f"Failed to write {output_path}: {e}")
        raise OutputError(f"Failed to write {output_path}: {e}") from e

    logger.debug(f"Wrote: {output_path} ({len(data)} bytes)")
    return output_path
