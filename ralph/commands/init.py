"""
ralph init - Archive on branch change and prepare the progress log.
"""

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_OK
from ralph.workflow.engine import Orchestrator


def cmd_init(args, config: RalphConfig) -> int:
    """Run the per-iteration setup."""
    result = Orchestrator(config).initialize()

    if result.archived:
        print(f"Archived previous run: {result.previous_branch}")
        print(f"  -> {result.archive_path}")
        for note in result.skipped:
            print(f"  [WARN] not archived: {note}")
        print("Progress log reset.")
    elif result.first_run:
        print(f"Tracking branch: {result.current_branch or '(none)'}")

    print(f"Ralph initialized. PRD: {config.prd_path}")
    return EXIT_OK
