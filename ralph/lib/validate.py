"""
Schema validation for ralph.

Validates persisted records against the JSON Schemas bundled in
ralph/schemas/. Fails hard with the path of the offending field.
"""

import json
from pathlib import Path

import jsonschema
from jsonschema.exceptions import best_match


class ValidationError(Exception):
    """Schema validation failed."""

    def __init__(self, schema_name: str, message: str, path: str | None = None):
        self.schema_name = schema_name
        self.message = message
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Get path to the bundled schemas directory."""
    return Path(__file__).resolve().parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text(encoding="utf-8"))
    return _schema_cache[schema_name]


def _format_path(error: jsonschema.ValidationError) -> str:
    """Render an error location like `userStories[2].priority`."""
    if not error.absolute_path:
        return "(root)"
    out = ""
    for part in error.absolute_path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def validate(data, schema_name: str) -> None:
    """
    Validate data against named schema.

    Only the most relevant error is reported (jsonschema's best_match).

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft7Validator(schema)

    error = best_match(validator.iter_errors(data))
    if error is not None:
        raise ValidationError(schema_name, error.message, _format_path(error))
