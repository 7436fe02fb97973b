#!/usr/bin/env python3
"""Ralph CLI entrypoint."""

import argparse
import logging
import sys

from ralph.lib.config import ConfigError, load_config, resolve_root
from ralph.lib.constants import EXIT_ERROR
from ralph.lib.prompts import MissingTemplateError
from ralph.prd.store import MalformedStoreError
from ralph.workflow.completion import UnknownStoryError
from ralph.workflow.fsm import OutOfOrderError
from ralph.commands import archive as cmd_archive_module
from ralph.commands import check as cmd_check_module
from ralph.commands import complete as cmd_complete_module
from ralph.commands import init as cmd_init_module
from ralph.commands import next as cmd_next_module
from ralph.commands import progress as cmd_progress_module
from ralph.commands import prompt as cmd_prompt_module
from ralph.commands import run as cmd_run_module
from ralph.commands import status as cmd_status_module

logger = logging.getLogger(__name__)

# Failures reported as "ERROR: <message>" with EXIT_ERROR
REPORTED_ERRORS = (
    ConfigError,
    MalformedStoreError,
    UnknownStoryError,
    MissingTemplateError,
    OutOfOrderError,
    OSError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ralph', description='Story loop orchestrator')
    parser.add_argument('--root', '-r', help='Project root (default: $PROJECT_ROOT or cwd)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # ralph init
    p_init = subparsers.add_parser('init', help='Archive on branch change, set up progress log')
    p_init.set_defaults(func=cmd_init_module.cmd_init)

    # ralph check
    p_check = subparsers.add_parser('check', help='Exit 0 if all stories pass, 1 otherwise')
    p_check.set_defaults(func=cmd_check_module.cmd_check)

    # ralph next
    p_next = subparsers.add_parser('next', help='Print next incomplete story as JSON')
    p_next.set_defaults(func=cmd_next_module.cmd_next)

    # ralph prompt
    p_prompt = subparsers.add_parser('prompt', help='Render the prompt for the next story')
    p_prompt.add_argument('--stdout', action='store_true', help='Print instead of writing the output file')
    p_prompt.set_defaults(func=cmd_prompt_module.cmd_prompt)

    # ralph complete
    p_complete = subparsers.add_parser('complete', help='Mark a story as passing')
    p_complete.add_argument('story_id', help='Story ID (e.g., US-001)')
    p_complete.set_defaults(func=cmd_complete_module.cmd_complete)

    # ralph status
    p_status = subparsers.add_parser('status', help='Show stories and the next one up')
    p_status.set_defaults(func=cmd_status_module.cmd_status)

    # ralph progress
    p_progress = subparsers.add_parser('progress', help='Append an entry to the progress log')
    p_progress.add_argument('text', nargs='+', help='Entry text')
    p_progress.set_defaults(func=cmd_progress_module.cmd_progress)

    # ralph archive
    p_archive = subparsers.add_parser('archive', help='List archived runs')
    p_archive.set_defaults(func=cmd_archive_module.cmd_archive)

    # ralph run
    p_run = subparsers.add_parser('run', help='Interactive loop over stories')
    p_run.add_argument('--max-iterations', '-n', type=int, help='Stop after N iterations (default: MAX_ITERATIONS or 10)')
    p_run.set_defaults(func=cmd_run_module.cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(resolve_root(args.root))
        return args.func(args, config)
    except REPORTED_ERRORS as e:
        logger.debug("Command failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
