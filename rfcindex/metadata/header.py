"""
RFC header parsing.

RFC texts start with a bullet list of metadata, e.g.

    - Feature Name: `let_else`
    - Start Date: 2021-05-31
    - RFC PR: [rust-lang/rfcs#3137](https://github.com/rust-lang/rfcs/pull/3137)
    - Rust Issue: [rust-lang/rust#87335](https://github.com/rust-lang/rust/issues/87335)

Only the leading block is read; the first non-bullet line ends it.
"""

from dataclasses import dataclass, field

from rfcindex.lib.errors import ParseError
from rfcindex.lib.tokens import parse_multiple

KEY_START_DATE = "start date"
KEY_FEATURE_NAME = "feature name"
ISSUE_KEYS = ("rust issue", "tracking issues")


@dataclass
class RfcHeader:
    """Fields extracted from an RFC header block."""
    start_date: str = ""
    feature_name: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def split_header_line(line: str) -> tuple[str, str]:
    """Split '- Key: value' into ('key', 'value').

    Raises:
        ParseError: line has no ':'
    """
    body = line[1:].strip()
    key, sep, value = body.partition(":")
    if not sep:
        raise ParseError(f"Malformed header line: '{line}'")
    return key.strip().lower(), value.strip()


def parse_header(text: str) -> RfcHeader:
    """Extract start date, feature names and issues from an RFC's text.

    The first occurrence of each key wins. Unknown keys are ignored.
    """
    header = RfcHeader()
    seen: set[str] = set()

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("- "):
            break

        key, value = split_header_line(line)
        if key in ISSUE_KEYS:
            key = ISSUE_KEYS[0]
        if key in seen:
            continue

        if key == KEY_START_DATE:
            header.start_date = value
        elif key == KEY_FEATURE_NAME:
            header.feature_name = parse_multiple(value)
        elif key == ISSUE_KEYS[0]:
            header.issues = parse_multiple(value)
        else:
            continue
        seen.add(key)

    return header
