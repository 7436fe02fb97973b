"""
ralph run - Interactive story loop.

Each iteration renders the prompt for the next story, tells the operator
what to do with it, and waits for ENTER. The operator (or agent) marks the
story complete with `ralph complete <ID>` before pressing ENTER.
"""

import logging
import time
from typing import Callable, Optional

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_INCOMPLETE, EXIT_OK
from ralph.workflow.engine import NoIncompleteStoryError, Orchestrator

logger = logging.getLogger(__name__)

BANNER = "=" * 55
RULE = "-" * 55


def _print_instructions(story, prompt_path) -> None:
    print(f"Prompt generated: {prompt_path}")
    print()
    print(RULE)
    print("INSTRUCTIONS:")
    print(RULE)
    print()
    print("1. Open the generated prompt in your agent")
    print("2. Let the agent implement the story")
    print("3. After implementation:")
    print("   - Run quality checks (typecheck, tests, lint)")
    print(f"   - Commit: git commit -m 'feat: {story.id} - {story.title or ''}'")
    print(f"   - Mark complete: ralph complete {story.id}")
    print("   - Record learnings: ralph progress \"...\"")
    print()
    print("4. Press ENTER when the story is complete, or Ctrl+C to stop")
    print()
    print(RULE)
    print()


def run_loop(
    orchestrator: Orchestrator,
    max_iterations: int,
    wait: Optional[Callable[[str], str]] = None,
    pause: float = 1.0,
) -> int:
    """Drive up to `max_iterations` stories.

    Returns:
        EXIT_OK when every story passes, EXIT_INCOMPLETE otherwise
    """
    if wait is None:
        wait = input

    print(f"Starting Ralph - Max iterations: {max_iterations}")
    print()

    if orchestrator.is_done():
        print("All stories are already complete!")
        return EXIT_OK

    for i in range(1, max_iterations + 1):
        print()
        print(BANNER)
        print(f"  Ralph Iteration {i} of {max_iterations}")
        print(BANNER)
        print()

        if orchestrator.is_done():
            print("All stories are complete!")
            print(f"Completed at iteration {i} of {max_iterations}")
            return EXIT_OK

        try:
            story, prompt_path = orchestrator.write_story_prompt()
        except NoIncompleteStoryError:
            print("No incomplete stories found!")
            return EXIT_OK

        print(f"Next story: {story.id} - {story.title or ''}")
        print()
        _print_instructions(story, prompt_path)

        try:
            wait("Press ENTER after completing the story... ")
        except EOFError:
            logger.debug("stdin closed, continuing without waiting")
        except KeyboardInterrupt:
            print()
            print("Stopped.")
            return EXIT_INCOMPLETE
        print()

        if orchestrator.is_done():
            print()
            print("Ralph completed all tasks!")
            print(f"Completed at iteration {i} of {max_iterations}")
            return EXIT_OK

        print("Continuing to next story...")
        if pause:
            time.sleep(pause)

    print()
    print(f"Ralph reached max iterations ({max_iterations}) without completing all tasks.")
    print(f"Check {orchestrator.config.progress_path} for status.")
    print()
    print("To continue, run: ralph run -n <remaining_iterations>")
    return EXIT_INCOMPLETE


def cmd_run(args, config: RalphConfig) -> int:
    orchestrator = Orchestrator(config)
    orchestrator.initialize()
    max_iterations = args.max_iterations or config.max_iterations
    return run_loop(orchestrator, max_iterations)
