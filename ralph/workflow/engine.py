"""
Loop orchestrator.

One driver-loop iteration is: initialize -> is_done -> next prompt ->
(agent works) -> mark complete -> is_done -> ...

Orchestrator keeps no state of its own. Each call loads what it needs from
disk and writes back atomically, so the loop can run as a sequence of
separate processes. Ordering is only enforced when strict_order is set.
"""

import logging
from pathlib import Path

from ralph.lib.atomic import atomic_write_text
from ralph.lib.config import RalphConfig
from ralph.lib.prompts import load_template, render_prompt
from ralph.prd.models import Prd, Story
from ralph.prd.progress import append_progress, ensure_progress_log
from ralph.prd.store import load_prd
from ralph.workflow.archive import ArchiveResult, archive_on_branch_change
from ralph.workflow.completion import complete_story
from ralph.workflow.fsm import LoopFSM, reset_fsm
from ralph.workflow.selection import select_next

logger = logging.getLogger(__name__)


class NoIncompleteStoryError(Exception):
    """Every story passes; the loop is finished. Not a failure."""

    def __init__(self, prd: Prd):
        self.branch = prd.branch
        self.total = len(prd.stories)
        super().__init__(f"No incomplete stories on {prd.branch} ({self.total} complete)")


def is_done(prd: Prd) -> bool:
    """True iff no story is left to select."""
    return select_next(prd) is None


def next_story(prd: Prd) -> Story:
    """Selected story, or NoIncompleteStoryError when all pass."""
    story = select_next(prd)
    if story is None:
        raise NoIncompleteStoryError(prd)
    return story


def next_prompt(prd: Prd, template: str) -> str:
    """Render the prompt for the next story.

    Raises:
        NoIncompleteStoryError: if every story passes
    """
    return render_prompt(template, next_story(prd), prd)


class Orchestrator:
    """Driver-facing operations over one project's files."""

    def __init__(self, config: RalphConfig):
        self.config = config

    def _fsm(self) -> LoopFSM | None:
        if not self.config.strict_order:
            return None
        return LoopFSM(self.config.state_path)

    def load(self) -> Prd:
        return load_prd(self.config.prd_path)

    def initialize(self) -> ArchiveResult:
        """Archive on branch change and make sure the progress log exists.

        Safe to call at the start of every iteration.
        """
        prd = self.load()
        result = archive_on_branch_change(self.config, prd.branch)
        if result.archived:
            reset_fsm(self.config.state_path)

        if ensure_progress_log(self.config.progress_path):
            logger.info(f"Created progress log {self.config.progress_path}")
        self.config.prompt_output_path.parent.mkdir(parents=True, exist_ok=True)
        return result

    def is_done(self) -> bool:
        prd = self.load()
        done = is_done(prd)
        fsm = self._fsm()
        if fsm is not None:
            fsm.sync(has_work=not done)
        return done

    def next_story(self) -> Story:
        """Select the next story without rendering anything."""
        return self._select(self._fsm(), "next_story")[1]

    def _select(self, fsm: LoopFSM | None, operation: str) -> tuple[Prd, Story]:
        # In strict mode "done" still reports NoIncompleteStoryError rather
        # than an ordering error; a done machine with fresh work is out of order.
        if fsm is not None:
            fsm.require(operation, "has_work", "prompt_issued", "done")
        prd = self.load()
        story = next_story(prd)
        if fsm is not None:
            fsm.require(operation, "has_work", "prompt_issued")
        return prd, story

    def next_story_prompt(self) -> str:
        """Render the prompt for the next story.

        Raises:
            NoIncompleteStoryError: when every story passes
            MissingTemplateError: when the template cannot be read
        """
        return self._issue()[1]

    def write_story_prompt(self) -> tuple[Story, Path]:
        """Render the next prompt into the configured output file."""
        story, text = self._issue()
        atomic_write_text(self.config.prompt_output_path, text)
        logger.info(f"Wrote prompt for {story.id} to {self.config.prompt_output_path}")
        return story, self.config.prompt_output_path

    def _issue(self) -> tuple[Story, str]:
        fsm = self._fsm()
        prd, story = self._select(fsm, "next_story_prompt")
        text = render_prompt(load_template(self.config.template_path), story, prd)

        if fsm is not None:
            fsm.issue_prompt()
        return story, text

    def mark_story_complete(self, story_id: str) -> Story:
        """Set passes=true for `story_id` and persist the PRD.

        Raises:
            UnknownStoryError: if the id is not in the PRD
        """
        fsm = self._fsm()
        if fsm is not None:
            fsm.require("mark_story_complete", "prompt_issued")

        prd = complete_story(self.config.prd_path, story_id)

        if fsm is not None:
            fsm.story_completed()
        return next(s for s in prd.stories if s.id == story_id)

    def append_progress(self, text: str) -> None:
        append_progress(self.config.progress_path, text)
