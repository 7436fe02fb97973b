"""
ralph complete - Set passes=true for a story.
"""

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_OK
from ralph.workflow.engine import Orchestrator
from ralph.workflow.selection import incomplete_stories


def cmd_complete(args, config: RalphConfig) -> int:
    orchestrator = Orchestrator(config)
    story = orchestrator.mark_story_complete(args.story_id)
    print(f"Marked {story.id} complete")

    remaining = incomplete_stories(orchestrator.load())
    if remaining:
        print(f"{len(remaining)} story(s) remaining, next: {remaining[0].id}")
    else:
        print("All stories complete.")
    return EXIT_OK
