"""Escape handling for HELP text and label values."""

import re

ESCAPE_SEQUENCES = {
    "\\\\": "\\",
    "\\n": "\n",
    '\\"': '"',
}

LABEL_ESCAPING_RE = re.compile(r'\\[\\n"]')


def _replace_escape_sequence(match: re.Match) -> str:
    return ESCAPE_SEQUENCES[match.group(0)]


def unescape_help(text: str) -> str:
    """Resolve backslash escapes in HELP text.

    ``\\\\`` becomes one backslash and ``\\n`` a newline. A backslash followed
    by any other character is kept together with that character, and a
    trailing lone backslash is kept as is.

    Args:
        text: Remainder of a ``# HELP <name> `` line

    Returns:
        Unescaped help text

    Example:
        >>> unescape_help("a\\\\\\\\b\\\\nc\\\\q")
        'a\\\\b\\nc\\\\q'
    """
    result = []
    slash = False

    for char in text:
        if slash:
            if char == "\\":
                result.append("\\")
            elif char == "n":
                result.append("\n")
            else:
                result.append("\\" + char)
            slash = False
        elif char == "\\":
            slash = True
        else:
            result.append(char)

    if slash:
        result.append("\\")

    return "".join(result)


def unescape_label_value(value: str) -> str:
    """Resolve ``\\\\``, ``\\"`` and ``\\n`` in a quoted label value."""
    if "\\" not in value:
        return value
    return LABEL_ESCAPING_RE.sub(_replace_escape_sequence, value)
