"""
PRD module for ralph.

Typed story store (prd.json) and the append-only progress log.
"""

from ralph.prd.models import Prd, Story
from ralph.prd.store import (
    MalformedStoreError,
    dump_prd,
    find_story,
    load_prd,
    parse_prd,
    save_prd,
)
from ralph.prd.progress import (
    append_progress,
    ensure_progress_log,
    reset_progress_log,
)

__all__ = [
    "Prd",
    "Story",
    "MalformedStoreError",
    "dump_prd",
    "find_story",
    "load_prd",
    "parse_prd",
    "save_prd",
    "append_progress",
    "ensure_progress_log",
    "reset_progress_log",
]
