"""
Progress log (progress.txt).

Append-only learnings log shared between iterations. The header is written
once per unit of work; entries are only ever appended.
"""

import logging
from datetime import datetime
from pathlib import Path

from ralph.lib.atomic import atomic_write_text
from ralph.lib.constants import PROGRESS_SEPARATOR, PROGRESS_TITLE

logger = logging.getLogger(__name__)


def progress_header(started: datetime) -> str:
    """Fresh log header: title, start timestamp, separator."""
    return f"{PROGRESS_TITLE}\nStarted: {started.isoformat(timespec='seconds')}\n{PROGRESS_SEPARATOR}\n"


def reset_progress_log(path: Path, now: datetime | None = None) -> None:
    """Truncate the log to a fresh header."""
    atomic_write_text(path, progress_header(now or datetime.now()))
    logger.info(f"Progress log reset: {path}")


def ensure_progress_log(path: Path, now: datetime | None = None) -> bool:
    """Create the log with a header if it does not exist.

    Returns:
        True if the file was created
    """
    if path.exists():
        return False
    reset_progress_log(path, now)
    return True


def append_progress(path: Path, text: str, now: datetime | None = None) -> None:
    """Append a timestamped entry, creating the log first if needed."""
    timestamp = (now or datetime.now()).isoformat(timespec="seconds")
    ensure_progress_log(path, now)
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"\n## {timestamp}\n{text.rstrip()}\n{PROGRESS_SEPARATOR}\n")
