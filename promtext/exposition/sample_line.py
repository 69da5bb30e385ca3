"""Tokenizer for a single exposition sample line.

A sample line carries a metric name, an optional brace-delimited label set,
a value and an optional millisecond timestamp::

    http_requests_total{method="post",code="200"} 1027 1395066363000

Values and timestamps are returned as the exact text from the line so that
``3851.0`` stays ``3851.0`` and special values such as ``+Inf`` survive.
"""

import re
from dataclasses import dataclass

from promtext.exceptions import InvalidLineError
from promtext.exposition.escaping import unescape_label_value

METRIC_NAME_RE = re.compile(r"[^{}\s]+")

LABEL_RE = re.compile(
    r"""
    ([^=\s{},"]+)          # label name
    \s*=\s*                # equal sign, whitespace around it is ignored
    "((?:[^"\\]|\\.)*)"    # quoted value, escape sequences resolved later
    \s*
    """,
    re.VERBOSE,
)

VALUE_RE = re.compile(
    r"""
    [+-]?
    (?:
        (?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?
        | inf(?:inity)?
        | nan
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)

TIMESTAMP_RE = re.compile(r"-?\d+")


@dataclass
class ParsedSample:
    """Result of tokenizing one sample line."""

    name: str
    value: str
    labels: dict[str, str] | None = None
    timestamp_ms: str | None = None


def _skip_whitespace(line: str, pos: int) -> int:
    while pos < len(line) and line[pos].isspace():
        pos += 1
    return pos


def _parse_labels(line: str, pos: int) -> tuple[dict[str, str] | None, int]:
    """Parse label pairs starting just after ``{``.

    Returns the labels (None for an empty set) and the position after ``}``.
    """
    labels: dict[str, str] = {}
    while True:
        pos = _skip_whitespace(line, pos)
        if pos >= len(line):
            raise InvalidLineError(line, reason="unterminated label set")
        if line[pos] == "}":
            return labels or None, pos + 1

        m = LABEL_RE.match(line, pos)
        if m is None:
            raise InvalidLineError(line, reason=f"invalid label at position {pos}")
        labels[m.group(1)] = unescape_label_value(m.group(2))
        pos = m.end()

        if pos < len(line) and line[pos] == ",":
            pos += 1
        elif pos >= len(line) or line[pos] != "}":
            raise InvalidLineError(line, reason="expected ',' or '}' after label")


def parse_sample_line(line: str) -> ParsedSample:
    """
    Parse one non-comment, non-blank exposition line.

    Args:
        line: Trimmed sample line

    Returns:
        ParsedSample with name, value text, labels and timestamp text

    Raises:
        InvalidLineError: If the line does not follow the sample grammar

    Example:
        >>> sample = parse_sample_line('rpc_duration_seconds{quantile="0.5"} 4773')
        >>> sample.name, sample.labels, sample.value
        ('rpc_duration_seconds', {'quantile': '0.5'}, '4773')
    """
    name_match = METRIC_NAME_RE.match(line)
    if name_match is None:
        raise InvalidLineError(line, reason="missing metric name")
    name = name_match.group(0)
    pos = name_match.end()

    labels = None
    brace_pos = _skip_whitespace(line, pos)
    if brace_pos < len(line) and line[brace_pos] == "{":
        labels, pos = _parse_labels(line, brace_pos + 1)

    if pos < len(line) and not line[pos].isspace():
        raise InvalidLineError(line, reason="expected whitespace before value")

    tokens = line[pos:].split()
    if not tokens:
        raise InvalidLineError(line, reason="missing value")
    if len(tokens) > 2:
        raise InvalidLineError(line, reason="unexpected tokens after timestamp")

    value = tokens[0]
    if VALUE_RE.fullmatch(value) is None:
        raise InvalidLineError(line, reason=f"invalid value: {value}")

    timestamp_ms = None
    if len(tokens) == 2:
        timestamp_ms = tokens[1]
        if TIMESTAMP_RE.fullmatch(timestamp_ms) is None:
            raise InvalidLineError(line, reason=f"invalid timestamp: {timestamp_ms}")

    return ParsedSample(name=name, value=value, labels=labels, timestamp_ms=timestamp_ms)


def labels_equal(a: dict[str, str] | None, b: dict[str, str] | None) -> bool:
    """Compare two label sets.

    True when both are absent, or both are present with the same names and
    values. An empty mapping is not equal to an absent one.
    """
    if a is None or b is None:
        return a is None and b is None
    return a == b
