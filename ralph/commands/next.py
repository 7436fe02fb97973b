"""
ralph next - Print the next incomplete story as JSON.
"""

import json

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_NOTHING_LEFT, EXIT_OK
from ralph.workflow.engine import NoIncompleteStoryError, Orchestrator


def cmd_next(args, config: RalphConfig) -> int:
    try:
        story = Orchestrator(config).next_story()
    except NoIncompleteStoryError:
        print("No incomplete stories")
        return EXIT_NOTHING_LEFT

    print(json.dumps(story.to_dict(), separators=(",", ":"), ensure_ascii=False))
    return EXIT_OK
