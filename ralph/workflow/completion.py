"""
Completion tracking.

Flips `passes` to true for one story. The in-memory operation returns a
new Prd; the on-disk operation wraps it in load -> mark -> atomic save.
"""

import copy
import logging
from pathlib import Path

from ralph.prd.models import Prd
from ralph.prd.store import find_story, load_prd, save_prd

logger = logging.getLogger(__name__)


class UnknownStoryError(Exception):
    """Raised when a story id is not present in the PRD."""

    def __init__(self, story_id: str, known: list[str] | None = None):
        self.story_id = story_id
        self.known = known or []
        hint = f" (known: {', '.join(self.known)})" if self.known else ""
        super().__init__(f"Unknown story '{story_id}'{hint}")


def mark_complete(prd: Prd, story_id: str) -> Prd:
    """Return a copy of `prd` with `story_id` marked as passing.

    Already-complete stories are accepted and returned unchanged.

    Raises:
        UnknownStoryError: if no story has that id (the input is untouched)
    """
    if find_story(prd, story_id) is None:
        raise UnknownStoryError(story_id, [s.id for s in prd.stories])

    updated = copy.deepcopy(prd)
    story = find_story(updated, story_id)
    if story.passes:
        logger.debug(f"{story_id} already passes, no change")
    story.passes = True
    return updated


def complete_story(prd_path: Path, story_id: str) -> Prd:
    """Mark a story complete in the PRD file.

    Skips the write when the story was already complete.

    Returns:
        The PRD as persisted

    Raises:
        FileNotFoundError, MalformedStoreError: if the PRD cannot be loaded
        UnknownStoryError: if the id is not in the PRD (file untouched)
    """
    prd = load_prd(prd_path)
    updated = mark_complete(prd, story_id)
    if updated != prd:
        save_prd(updated, prd_path)
        logger.info(f"Marked {story_id} complete in {prd_path}")
    return updated
