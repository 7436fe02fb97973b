"""
Safe .env file parser.

Parses KEY=value files without shell execution. Used for ralph.env, the
optional per-project settings file. Values that look like shell
substitutions are rejected rather than expanded.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    r'`',           # backticks
    r'\$\(',        # command substitution
    r'\$\{',        # variable expansion
    r';',           # command chaining
    r'&&',
    r'\|',          # pipes and OR chaining
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


class EnvParseError(ValueError):
    """Raised when an env file line cannot be parsed."""

    def __init__(self, filepath: Path, lineno: int, message: str):
        self.filepath = filepath
        self.lineno = lineno
        super().__init__(f"{filepath}:{lineno}: {message}")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env_text(text: str, filepath: Path = Path("<string>")) -> dict[str, str]:
    """
    Parse env-file content into a dict.

    Blank lines and `#` comments are skipped. A leading `export ` is
    tolerated so files can double as shell snippets.

    Raises:
        EnvParseError: if syntax is invalid or a forbidden pattern is found
    """
    result = {}

    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()

        if not line or line.startswith('#'):
            continue

        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        if '=' not in line:
            raise EnvParseError(filepath, lineno, "invalid syntax (no '=')")

        key, _, value = line.partition('=')
        key = key.strip()
        value = _unquote(value.strip())

        if not KEY_PATTERN.match(key):
            raise EnvParseError(filepath, lineno, f"invalid key '{key}'")

        for pattern in FORBIDDEN_PATTERNS:
            if re.search(pattern, value):
                raise EnvParseError(filepath, lineno, f"forbidden pattern in value of {key}")

        result[key] = value

    return result


def load_env(filepath: Path) -> dict[str, str]:
    """
    Parse env file safely, return dict.

    Raises:
        FileNotFoundError: if file doesn't exist
        EnvParseError: if syntax invalid or forbidden pattern found
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {path}")
    return parse_env_text(path.read_text(encoding="utf-8"), path)
