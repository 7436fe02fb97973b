"""
ralph progress - Append a learning to the progress log.
"""

import sys

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_ERROR, EXIT_OK
from ralph.workflow.engine import Orchestrator


def cmd_progress(args, config: RalphConfig) -> int:
    text = " ".join(args.text).strip()
    if not text:
        print("ERROR: Nothing to append", file=sys.stderr)
        return EXIT_ERROR

    Orchestrator(config).append_progress(text)
    print(f"Appended to {config.progress_path}")
    return EXIT_OK
