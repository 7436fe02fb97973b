"""
Archive on branch change.

When the PRD's branchName differs from the one recorded in .last-branch,
the previous run's prd.json and progress.txt are copied to
archive/<YYYY-MM-DD>-<branch-suffix>/ and the progress log starts over.

Losing a snapshot never blocks the new run: copy failures are logged and
skipped. A same-day archive for the same branch is overwritten.
"""

import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from ralph.lib.atomic import atomic_write_text
from ralph.lib.config import RalphConfig
from ralph.prd.progress import reset_progress_log

logger = logging.getLogger(__name__)


@dataclass
class ArchiveResult:
    """What a branch check did."""
    current_branch: str
    previous_branch: Optional[str] = None
    first_run: bool = False
    archived: bool = False
    archive_path: Optional[Path] = None
    copied: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def read_last_branch(path: Path) -> Optional[str]:
    """Return the recorded branch, or None if no marker exists yet."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8").rstrip("\n")


def write_last_branch(path: Path, branch: str) -> None:
    atomic_write_text(path, branch + "\n")


def archive_folder_name(branch: str, prefix: str, now: datetime) -> str:
    """`<date>-<branch without prefix>`, e.g. 2026-01-31-login-flow.

    Any remaining slashes become dashes so the archive stays one level deep.
    """
    suffix = branch[len(prefix):] if prefix and branch.startswith(prefix) else branch
    suffix = suffix.strip("/").replace("/", "-")
    return f"{now.date().isoformat()}-{suffix}"


def _copy_into(src: Path, dest_dir: Path, result: ArchiveResult) -> None:
    if not src.exists():
        logger.debug(f"Nothing to archive at {src}")
        result.skipped.append(f"{src.name}: missing")
        return
    try:
        dest = dest_dir / src.name
        shutil.copy2(src, dest)
        result.copied.append(dest)
    except OSError as e:
        logger.warning(f"Failed to archive {src} to {dest_dir}: {e}")
        result.skipped.append(f"{src.name}: {e}")


def archive_on_branch_change(
    config: RalphConfig,
    current_branch: str,
    now: datetime | None = None,
) -> ArchiveResult:
    """Archive the previous run if the branch changed, then record the branch.

    Args:
        config: Project layout (PRD, progress log, archive dir, marker)
        current_branch: branchName of the PRD now on disk
        now: Clock override for tests

    Returns:
        ArchiveResult describing what happened
    """
    now = now or datetime.now()
    result = ArchiveResult(current_branch=current_branch)

    previous = read_last_branch(config.last_branch_path)
    result.previous_branch = previous

    if previous is None:
        result.first_run = True
        logger.info(f"No {config.last_branch_path.name} yet, recording '{current_branch}'")
    elif current_branch and previous and current_branch != previous:
        folder = config.archive_dir / archive_folder_name(previous, config.branch_prefix, now)
        logger.info(f"Archiving previous run: {previous} -> {folder}")

        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Failed to create archive folder {folder}: {e}")
            result.skipped.append(f"{folder.name}: {e}")
        else:
            result.archive_path = folder
            _copy_into(config.prd_path, folder, result)
            _copy_into(config.progress_path, folder, result)
            result.archived = True

        reset_progress_log(config.progress_path, now)

    if current_branch and current_branch != previous:
        write_last_branch(config.last_branch_path, current_branch)

    return result
