"""
ralph check - Exit 0 if every story passes, 1 if work remains.
"""

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_INCOMPLETE, EXIT_OK
from ralph.workflow.engine import Orchestrator
from ralph.workflow.selection import incomplete_stories


def cmd_check(args, config: RalphConfig) -> int:
    orchestrator = Orchestrator(config)
    if orchestrator.is_done():
        print("All stories complete")
        return EXIT_OK

    remaining = len(incomplete_stories(orchestrator.load()))
    print(f"{remaining} story/stories remaining")
    return EXIT_INCOMPLETE
