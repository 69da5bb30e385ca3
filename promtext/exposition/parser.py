"""Prometheus text exposition format parser.

This module turns a complete exposition payload into an ordered list of
metric families. Lines are read one at a time; metadata lines (``# HELP``,
``# TYPE``) and sample lines feed a family accumulator which is flushed
whenever a line names a metric outside the open family, and once more when
the input is exhausted.

Example:
    families = parse_prometheus_text_format(text)

    for family in families:
        print(f"{family.name} ({family.type.value}): {len(family.metrics)} samples")
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from promtext.exceptions import InvalidLineError
from promtext.exposition.escaping import unescape_help
from promtext.exposition.flatten import RawSample, flatten_samples
from promtext.exposition.models import MetricFamily, MetricType, build_sample
from promtext.exposition.sample_line import (
    ParsedSample,
    labels_equal,
    parse_sample_line,
)

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "# "
HELP_INSTRUCTION = "HELP "
TYPE_INSTRUCTION = "TYPE "

SUMMARY_TYPE = MetricType.SUMMARY.value
HISTOGRAM_TYPE = MetricType.HISTOGRAM.value

# declared type -> (group field, key label, value field)
FLATTEN_LAYOUTS = {
    SUMMARY_TYPE: ("quantiles", "quantile", "value"),
    HISTOGRAM_TYPE: ("buckets", "le", "bucket"),
}


class LineFacts(NamedTuple):
    """What one line contributes: a metric name, metadata or a sample."""

    name: str | None = None
    help: str | None = None
    type: str | None = None
    sample: ParsedSample | None = None


def classify_line(line: str) -> LineFacts:
    """
    Extract the facts carried by one trimmed line.

    Blank lines and pure comments carry nothing. ``# HELP`` and ``# TYPE``
    carry a metric name and the unescaped help text or the uppercased type.
    Every other line is a sample.

    Args:
        line: Line with surrounding whitespace removed

    Returns:
        LineFacts for the line

    Raises:
        InvalidLineError: If a metadata line lacks its metric name, a TYPE
            value contains a space, or a sample line is malformed
    """
    if not line:
        return LineFacts()

    if not line.startswith(COMMENT_PREFIX):
        sample = parse_sample_line(line)
        return LineFacts(name=sample.name, sample=sample)

    data = line[len(COMMENT_PREFIX) :]
    if data.startswith(HELP_INSTRUCTION):
        instruction = HELP_INSTRUCTION
    elif data.startswith(TYPE_INSTRUCTION):
        instruction = TYPE_INSTRUCTION
    else:
        return LineFacts()

    data = data[len(instruction) :]
    space_index = data.find(" ")
    if space_index == -1:
        raise InvalidLineError(line, reason=f"{instruction.strip()} without metric name")

    name = data[:space_index]
    remain = data[space_index + 1 :]
    if instruction == HELP_INSTRUCTION:
        return LineFacts(name=name, help=unescape_help(remain))

    if " " in remain:
        raise InvalidLineError(line, reason="TYPE value contains whitespace")
    return LineFacts(name=name, type=remain.upper())


def allowed_names(name: str | None, metric_type: str | None) -> tuple[str, ...]:
    """Sample and metadata names that continue the family ``name``."""
    if not name:
        return ()
    if metric_type == HISTOGRAM_TYPE:
        return (name, f"{name}_count", f"{name}_sum", f"{name}_bucket")
    if metric_type == SUMMARY_TYPE:
        return (name, f"{name}_count", f"{name}_sum")
    return (name,)


def is_family_boundary(
    candidate: str | None, current_name: str | None, current_type: str | None
) -> bool:
    """True when a line naming ``candidate`` closes the open family."""
    return bool(candidate) and candidate not in allowed_names(current_name, current_type)


@dataclass
class FamilyAccumulator:
    """
    Running state of the family being read.

    ``help`` and ``type`` stay None until declared; the first declaration
    for the family wins.
    """

    name: str | None = None
    help: str | None = None
    type: str | None = None
    samples: list[RawSample] = field(default_factory=list)

    def adopt_metadata(self, help: str | None, type: str | None) -> None:
        if not self.help and help:
            self.help = help
        elif not self.type and type:
            self.type = type

    def add_sample(self, parsed: ParsedSample) -> None:
        """Store a sample, merging it into the previous one when labels match."""
        sample: RawSample = {}
        if parsed.labels is not None:
            sample["labels"] = parsed.labels
        if parsed.timestamp_ms is not None:
            sample["timestamp_ms"] = parsed.timestamp_ms

        if parsed.name == self.name:
            sample["value"] = parsed.value
        else:
            if self.type in FLATTEN_LAYOUTS:
                if parsed.name == f"{self.name}_count":
                    sample["count"] = parsed.value
                elif parsed.name == f"{self.name}_sum":
                    sample["sum"] = parsed.value
            if self.type == HISTOGRAM_TYPE and parsed.name == f"{self.name}_bucket":
                sample["bucket"] = parsed.value

        last = self.samples[-1] if self.samples else None
        if last is not None and labels_equal(sample.get("labels"), last.get("labels")):
            sample.pop("labels", None)
            last.update(sample)
        else:
            self.samples.append(sample)

    def finish(self) -> MetricFamily | None:
        """Build the family read so far, or None if no family is open."""
        if not self.name:
            return None

        samples = self.samples
        layout = FLATTEN_LAYOUTS.get(self.type or "")
        if layout is not None:
            samples = flatten_samples(samples, *layout)

        metric_type = MetricType.from_declared(self.type)
        if self.type and metric_type.value != self.type:
            logger.warning(f"Unknown type '{self.type}' for metric {self.name}, using UNTYPED")

        family = MetricFamily(
            name=self.name,
            help=self.help or "",
            type=metric_type,
            metrics=[build_sample(metric_type, sample) for sample in samples],
        )
        logger.debug(
            f"Closed metric family {family.name} ({family.type.value}) "
            f"with {len(family.metrics)} samples"
        )
        return family


def parse_prometheus_text_format(text: str) -> list[MetricFamily]:
    """
    Parse Prometheus text exposition format.

    Args:
        text: Complete exposition payload, LF-delimited

    Returns:
        List[MetricFamily]: Families in the order they were closed

    Raises:
        InvalidLineError: On the first malformed line; nothing is returned

    Example:
        >>> families = parse_prometheus_text_format(
        ...     "# TYPE http_requests_total counter\\n"
        ...     'http_requests_total{method="get"} 100\\n'
        ... )
        >>> families[0].to_dict()
        {'name': 'http_requests_total', 'help': '', 'type': 'COUNTER', 'metrics': [{'labels': {'method': 'get'}, 'value': '100'}]}
    """
    families: list[MetricFamily] = []
    current = FamilyAccumulator()

    lines = text.split("\n")
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        try:
            facts = classify_line(line)
        except InvalidLineError as e:
            logger.warning(f"Rejected line {line_number}: {e.reason or 'invalid line'}")
            raise

        if facts.name and facts.name == current.name:
            current.adopt_metadata(facts.help, facts.type)

        if is_family_boundary(facts.name, current.name, current.type):
            family = current.finish()
            if family is not None:
                families.append(family)
            current = FamilyAccumulator(
                name=facts.name,
                help=facts.help or None,
                type=facts.type or None,
            )

        if facts.sample is not None:
            current.add_sample(facts.sample)

    family = current.finish()
    if family is not None:
        families.append(family)

    logger.debug(f"Parsed {len(families)} metric families from {len(lines)} lines")
    return families
