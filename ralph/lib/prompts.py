"""
Prompt renderer for ralph.

Templates are plain markdown with bracket placeholders:

    [STORY_ID] [STORY_TITLE] [STORY_PRIORITY] [STORY_DESCRIPTION]
    [ACCEPTANCE_CRITERIA_LIST] [PROJECT_NAME] [BRANCH_NAME] [FEATURE_DESCRIPTION]

Substitution is a single regex pass, so a value that happens to contain a
placeholder is inserted literally and never expanded. Bracketed tokens the
renderer does not know are left as they are.
"""

import logging
import re
from pathlib import Path

from ralph.prd.models import Prd, Story

logger = logging.getLogger(__name__)

__all__ = [
    "MissingTemplateError",
    "PLACEHOLDERS",
    "load_template",
    "render_prompt",
    "format_criteria",
    "placeholder_values",
]

PLACEHOLDERS = (
    "STORY_ID",
    "STORY_TITLE",
    "STORY_PRIORITY",
    "STORY_DESCRIPTION",
    "ACCEPTANCE_CRITERIA_LIST",
    "PROJECT_NAME",
    "BRANCH_NAME",
    "FEATURE_DESCRIPTION",
)

_PLACEHOLDER_PATTERN = re.compile(r"\[(" + "|".join(PLACEHOLDERS) + r")\]")


class MissingTemplateError(Exception):
    """Raised when the prompt template cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Prompt template not readable: {path} ({reason})")


def load_template(path: Path) -> str:
    """
    Read a prompt template.

    Raises:
        MissingTemplateError: if the file is missing or unreadable
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MissingTemplateError(path, "file not found") from None
    except (OSError, UnicodeDecodeError) as e:
        raise MissingTemplateError(path, str(e)) from e

    logger.debug(f"Loaded prompt template: {path}")
    return content


def format_criteria(criteria: list[str]) -> str:
    """One `- ` bullet per criterion, in order."""
    return "\n".join(f"- {c}" for c in criteria)


def placeholder_values(story: Story, prd: Prd) -> dict[str, str]:
    """Map each placeholder name to its rendered value."""
    return {
        "STORY_ID": story.id,
        "STORY_TITLE": story.title or "",
        "STORY_PRIORITY": str(story.priority),
        "STORY_DESCRIPTION": story.description or "",
        "ACCEPTANCE_CRITERIA_LIST": format_criteria(story.criteria),
        "PROJECT_NAME": prd.project or "",
        "BRANCH_NAME": prd.branch,
        "FEATURE_DESCRIPTION": prd.description or "",
    }


def render_prompt(template: str, story: Story, prd: Prd) -> str:
    """
    Render a template for one story.

    Pure: reads nothing from disk and never touches the PRD.

    Args:
        template: Template text
        story: Story being worked on
        prd: PRD supplying project/branch/feature metadata

    Returns:
        Rendered prompt text
    """
    values = placeholder_values(story, prd)
    return _PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], template)
