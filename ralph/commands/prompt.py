"""
ralph prompt - Render the work prompt for the next story.

Writes .cursor/composer-prompt.md (or PROMPT_OUTPUT) by default; --stdout
prints the prompt instead.
"""

import sys

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_NOTHING_LEFT, EXIT_OK
from ralph.workflow.engine import NoIncompleteStoryError, Orchestrator


def cmd_prompt(args, config: RalphConfig) -> int:
    orchestrator = Orchestrator(config)
    try:
        if args.stdout:
            sys.stdout.write(orchestrator.next_story_prompt())
            return EXIT_OK
        story, path = orchestrator.write_story_prompt()
    except NoIncompleteStoryError:
        print("No incomplete story to generate prompt for")
        return EXIT_NOTHING_LEFT

    print(f"Generated: {path}")
    print(f"Story: {story.id} - {story.title or ''}")
    return EXIT_OK
