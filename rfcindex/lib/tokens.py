"""
Free-text list parser.

Splits fields such as "foo, bar, and `baz`" into token lists. Used for
feature names and tracking issues, both from the CLI and from RFC headers.
"""

__all__ = ["parse_multiple", "NOT_APPLICABLE"]

SEPARATORS = frozenset(" \n\r,;/")

# Quoted tokens are emitted without their quotes.
QUOTES = frozenset("`\"'")

# Grouped tokens keep their delimiters, e.g. "(foo/bar)" or "[text](url)".
GROUPS = {"(": ")", "[": "]"}

# Sentinels meaning "no value", compared case-insensitively.
NOT_APPLICABLE = ("NA", "N/A")

CONJUNCTION = "and"


def _find_closing(text: str, start: int, open_ch: str, close_ch: str) -> int:
    """Return the index of the delimiter closing text[start], or -1.

    Nested pairs of the same kind are balanced.
    """
    depth = 0
    for i in range(start, len(text)):
        c = text[i]
        if c == open_ch:
            depth += 1
        elif c == close_ch:
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_multiple(text: str) -> list[str]:
    """
    Parse a free-text field into an ordered list of tokens.

    Tokens are separated by whitespace, commas, semicolons and slashes. The
    bare word "and" acts as a separator. Quoted tokens (backtick, double or
    single quote) may contain separators and are unquoted; bracketed and
    parenthesised tokens may contain separators and keep their delimiters.
    An unclosed quote or bracket swallows the rest of the input.

    Args:
        text: Raw field value

    Returns:
        List of tokens, possibly empty. Duplicates are preserved.

    Example:
        >>> parse_multiple("foo, bar, and `baz`;")
        ['foo', 'bar', 'baz']
    """
    text = text.strip()
    if text.upper() in NOT_APPLICABLE:
        return []

    tokens: list[str] = []
    buf: list[str] = []

    def flush():
        word = "".join(buf)
        buf.clear()
        if word and word != CONJUNCTION:
            tokens.append(word)

    i = 0
    n = len(text)
    while i < n:
        c = text[i]

        if c in SEPARATORS:
            flush()
            i += 1
            continue

        if not buf and c in QUOTES:
            end = text.find(c, i + 1)
            if end == -1:
                word = text[i + 1:]
                i = n
            else:
                word = text[i + 1:end]
                i = end + 1
            if word:
                tokens.append(word)
            continue

        if not buf and c in GROUPS:
            end = _find_closing(text, i, c, GROUPS[c])
            # Markdown link: [text](url) stays one token
            if end != -1 and c == "[" and end + 1 < n and text[end + 1] == "(":
                end = _find_closing(text, end + 1, "(", ")")
            if end == -1:
                tokens.append(text[i:])
                i = n
            else:
                tokens.append(text[i:end + 1])
                i = end + 1
            continue

        buf.append(c)
        i += 1

    flush()
    return tokens
