"""Shared constants for ralph."""

# Process exit codes
EXIT_OK = 0
EXIT_INCOMPLETE = 1      # `check`: stories remain; `run`: max iterations reached
EXIT_ERROR = 2           # malformed store, unknown story, I/O, bad config
EXIT_NOTHING_LEFT = 3    # no incomplete story to hand out

# Default file layout, relative to the project root
CONFIG_FILE = "ralph.env"
DEFAULT_PRD_FILE = "prd.json"
DEFAULT_PROGRESS_FILE = "progress.txt"
DEFAULT_ARCHIVE_DIR = "archive"
DEFAULT_LAST_BRANCH_FILE = ".last-branch"
DEFAULT_STATE_FILE = ".ralph-state"
DEFAULT_PROMPT_TEMPLATE = ".cursor/composer-prompt-template.md"
DEFAULT_PROMPT_OUTPUT = ".cursor/composer-prompt.md"

DEFAULT_BRANCH_PREFIX = "ralph/"
DEFAULT_MAX_ITERATIONS = 10

PROGRESS_TITLE = "# Ralph Progress Log"
PROGRESS_SEPARATOR = "---"
