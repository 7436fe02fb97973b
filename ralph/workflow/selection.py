"""
Story selection.

The next story is the incomplete story with the lowest priority value; ties
go to whichever appears first in the PRD.
"""

from typing import Optional

from ralph.prd.models import Prd, Story

__all__ = ["incomplete_stories", "is_all_complete", "select_next"]


def incomplete_stories(prd: Prd) -> list[Story]:
    """Incomplete stories in selection order.

    Sorted by (priority, position in the PRD).
    """
    indexed = [(i, s) for i, s in enumerate(prd.stories) if not s.passes]
    indexed.sort(key=lambda pair: (pair[1].priority, pair[0]))
    return [s for _, s in indexed]


def select_next(prd: Prd) -> Optional[Story]:
    """Return the story to work on next, or None when every story passes."""
    remaining = incomplete_stories(prd)
    return remaining[0] if remaining else None


def is_all_complete(prd: Prd) -> bool:
    """True when no story is left (an empty PRD counts as complete)."""
    return all(s.passes for s in prd.stories)
