"""
Atomic file writes.

Every persisted record (prd.json, markers, the rendered prompt) is written
to a temp file in the destination directory and moved into place with
os.replace, so a concurrent reader sees either the old or the new content.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str) -> None:
    """Write `content` to `path` via temp file + os.replace.

    Creates the parent directory if needed. The temp file is removed if
    anything fails before the replace.

    Raises:
        OSError: if the write or replace fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600 files; keep the mode readers expect
        mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            logger.debug(f"Temp file already gone: {tmp_name}")
        raise
