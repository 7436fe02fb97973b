"""
Configuration loader for ralph.

Settings come from an optional ralph.env file at the project root. Every
path is resolved relative to that root, so a RalphConfig fully describes
where the PRD, progress log, archive and markers live.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import constants
from . import envparse

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATE = Path(__file__).resolve().parent.parent / "prompts" / "story.md"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    """Raised when ralph.env is unreadable or holds an invalid value."""
    pass


@dataclass
class RalphConfig:
    """Resolved project layout and loop settings."""
    root: Path
    prd_path: Path
    progress_path: Path
    archive_dir: Path
    last_branch_path: Path
    state_path: Path
    template_path: Path
    prompt_output_path: Path
    branch_prefix: str = constants.DEFAULT_BRANCH_PREFIX
    strict_order: bool = False
    max_iterations: int = constants.DEFAULT_MAX_ITERATIONS


def resolve_root(explicit: str | None = None) -> Path:
    """Pick the project root: explicit arg, then $PROJECT_ROOT, then cwd."""
    if explicit:
        return Path(explicit).resolve()
    env_root = os.environ.get("PROJECT_ROOT")
    if env_root:
        return Path(env_root).resolve()
    return Path.cwd()


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be true or false, got '{value}'")


def _parse_positive_int(key: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got '{value}'") from None
    if number < 1:
        raise ConfigError(f"{key} must be at least 1, got {number}")
    return number


def _resolve_template(root: Path, env: dict[str, str]) -> Path:
    """Explicit PROMPT_TEMPLATE wins; otherwise the project template, then the bundled one."""
    if "PROMPT_TEMPLATE" in env:
        return root / env["PROMPT_TEMPLATE"]
    project_template = root / constants.DEFAULT_PROMPT_TEMPLATE
    if project_template.exists():
        return project_template
    logger.debug(f"No {constants.DEFAULT_PROMPT_TEMPLATE} in {root}, using bundled template")
    return BUNDLED_TEMPLATE


def load_config(root: Path) -> RalphConfig:
    """Load ralph.env (if present) and return a RalphConfig rooted at `root`."""
    env_path = root / constants.CONFIG_FILE
    env: dict[str, str] = {}
    if env_path.exists():
        try:
            env = envparse.load_env(env_path)
        except (OSError, UnicodeDecodeError, envparse.EnvParseError) as e:
            raise ConfigError(f"Failed to read {env_path}: {e}") from e

    return RalphConfig(
        root=root,
        prd_path=root / env.get("PRD_FILE", constants.DEFAULT_PRD_FILE),
        progress_path=root / env.get("PROGRESS_FILE", constants.DEFAULT_PROGRESS_FILE),
        archive_dir=root / env.get("ARCHIVE_DIR", constants.DEFAULT_ARCHIVE_DIR),
        last_branch_path=root / env.get("LAST_BRANCH_FILE", constants.DEFAULT_LAST_BRANCH_FILE),
        state_path=root / env.get("STATE_FILE", constants.DEFAULT_STATE_FILE),
        template_path=_resolve_template(root, env),
        prompt_output_path=root / env.get("PROMPT_OUTPUT", constants.DEFAULT_PROMPT_OUTPUT),
        branch_prefix=env.get("BRANCH_PREFIX", constants.DEFAULT_BRANCH_PREFIX),
        strict_order=_parse_bool("STRICT_ORDER", env.get("STRICT_ORDER", "false")),
        max_iterations=_parse_positive_int(
            "MAX_ITERATIONS", env.get("MAX_ITERATIONS", str(constants.DEFAULT_MAX_ITERATIONS))
        ),
    )
