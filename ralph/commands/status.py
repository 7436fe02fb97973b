"""
ralph status - Show the PRD's stories and which one runs next.
"""

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_OK
from ralph.workflow.engine import Orchestrator
from ralph.workflow.selection import select_next


def cmd_status(args, config: RalphConfig) -> int:
    prd = Orchestrator(config).load()
    next_up = select_next(prd)

    print(f"Project: {prd.project or '(unnamed)'}")
    print(f"Branch:  {prd.branch or '(none)'}")
    if prd.description:
        print(f"Feature: {prd.description}")
    print()

    if not prd.stories:
        print("No stories in PRD")
        return EXIT_OK

    print(f"  {'ID':<12} {'PRI':>4}  {'STATUS':<8} TITLE")
    print("-" * 72)
    for story in prd.stories:
        status = "done" if story.passes else "todo"
        marker = "->" if next_up is not None and story.id == next_up.id else "  "
        title = story.title or ""
        title = title[:40] + "..." if len(title) > 40 else title
        print(f"{marker}{story.id:<12} {story.priority:>4}  {status:<8} {title}")
    print("-" * 72)

    done = sum(1 for s in prd.stories if s.passes)
    print(f"{done}/{len(prd.stories)} story(s) complete")
    return EXIT_OK
