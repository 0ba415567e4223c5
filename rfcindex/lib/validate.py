"""
Schema validation for rfcindex data files.

Records and the tag dictionary are checked against bundled JSON Schemas on
every read and before every write, so a hand-edited file with a typo fails
loudly instead of being half-loaded.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class ValidationError(Exception):
    """A record or tag dictionary does not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str | None = None):
        self.schema_name = schema_name
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"[{schema_name}] {message}{where}")


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> dict:
    """Read schemas/<name>.schema.json once per process."""
    schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not schema_path.is_file():
        raise ValidationError(schema_name, f"Bundled schema missing: {schema_path}")
    return json.loads(schema_path.read_text())


def validate(data: Any, schema_name: str) -> None:
    """Check decoded JSON against the "record" or "tags" schema.

    Raises:
        ValidationError: first violation, with its dotted location
    """
    try:
        jsonschema.validate(instance=data, schema=_load_schema(schema_name))
    except jsonschema.ValidationError as e:
        location = ".".join(str(p) for p in e.absolute_path) or "(root)"
        raise ValidationError(schema_name, e.message, location) from None


def validate_before_write(data: Any, schema_name: str, filepath: Path) -> None:
    """Refuse to write data that would not load back.

    Raises:
        ValidationError: data doesn't match the schema; names filepath
    """
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(schema_name, f"Not writing {filepath}: {e}") from None
