"""
Safe KEY=value parser for rfcindex.env.

The file is never sourced by a shell, but values that look like shell
constructs are still rejected so the file stays portable to Makefiles and
CI scripts that do source it.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    re.compile(r'`'),       # backticks
    re.compile(r'\$\('),    # command substitution
    re.compile(r'\$\{'),    # variable expansion
    re.compile(r';'),       # command chaining
    re.compile(r'&&'),
    re.compile(r'\|'),      # pipes and OR chaining
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env(text: str, source: str = "<string>") -> dict[str, str]:
    """
    Parse KEY=value lines.

    Blank lines and '#' comments are ignored, an optional leading 'export '
    is accepted, and matching surrounding quotes are stripped.

    Raises:
        ValueError: if a line has no '=', an invalid key, or a forbidden pattern
    """
    result = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        if '=' not in line:
            raise ValueError(f"{source}:{lineno}: Invalid syntax (no '=')")

        key, _, value = line.partition('=')
        key = key.strip()
        value = _unquote(value.strip())

        if not KEY_PATTERN.match(key):
            raise ValueError(f"{source}:{lineno}: Invalid key '{key}'")

        for pattern in FORBIDDEN_PATTERNS:
            if pattern.search(value):
                raise ValueError(f"{source}:{lineno}: Forbidden pattern in value of {key}")

        result[key] = value

    return result


def load_env(path: Path) -> dict[str, str]:
    """
    Load and parse an env file.

    Raises:
        FileNotFoundError: if the file doesn't exist
        ValueError: on invalid syntax (see parse_env)
    """
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {path}")
    return parse_env(path.read_text(), source=str(path))
