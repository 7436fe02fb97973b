"""
PRD load/save.

The PRD lives in a single JSON file (prd.json by default):

  {"project": ..., "branchName": ..., "description": ...,
   "userStories": [{"id", "title", "description", "acceptanceCriteria",
                    "priority", "passes", "notes"}, ...]}

All validation happens here, once, on load. Saves always rewrite the whole
document through an atomic replace.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ralph.lib.atomic import atomic_write_text
from ralph.lib.validate import ValidationError, validate
from ralph.prd.models import Prd, Story

logger = logging.getLogger(__name__)


class MalformedStoreError(Exception):
    """The persisted PRD does not match the expected shape."""

    def __init__(self, path: Path, message: str, field: str | None = None):
        self.path = path
        self.field = field
        super().__init__(f"Malformed PRD {path}: {message}" + (f" (at {field})" if field else ""))


def parse_prd(data, path: Path = Path("<memory>")) -> Prd:
    """Validate already-decoded JSON and build a Prd.

    Raises:
        MalformedStoreError: on schema violations or duplicate story ids
    """
    try:
        validate(data, "prd")
    except ValidationError as e:
        raise MalformedStoreError(path, e.message, e.path) from None

    seen: dict[str, int] = {}
    for index, story in enumerate(data["userStories"]):
        story_id = story["id"]
        if story_id in seen:
            raise MalformedStoreError(
                path,
                f"duplicate story id '{story_id}' (first at userStories[{seen[story_id]}])",
                f"userStories[{index}].id",
            )
        seen[story_id] = index

    return Prd.from_dict(data)


def load_prd(path: Path) -> Prd:
    """Load and validate a PRD from disk.

    Raises:
        FileNotFoundError: if the file does not exist
        MalformedStoreError: if it is not UTF-8 JSON or fails validation
    """
    if not path.exists():
        raise FileNotFoundError(f"PRD not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedStoreError(path, f"invalid UTF-8: {e}") from None
    except json.JSONDecodeError as e:
        raise MalformedStoreError(path, f"invalid JSON: {e}") from None

    prd = parse_prd(data, path)
    logger.debug(f"Loaded {path}: branch={prd.branch!r}, {len(prd.stories)} story(s)")
    return prd


def dump_prd(prd: Prd) -> str:
    """Serialize a PRD the way it is written to disk."""
    return json.dumps(prd.to_dict(), indent=2, ensure_ascii=False) + "\n"


def save_prd(prd: Prd, path: Path) -> None:
    """Write the full PRD atomically (temp file + replace)."""
    atomic_write_text(path, dump_prd(prd))
    logger.debug(f"Saved {path}")


def find_story(prd: Prd, story_id: str) -> Optional[Story]:
    """Look up a story by id."""
    for story in prd.stories:
        if story.id == story_id:
            return story
    return None
