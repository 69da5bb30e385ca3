"""Metric family and sample models for parsed exposition text."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MetricType(str, Enum):
    """Metric family type."""

    COUNTER = "COUNTER"
    GAUGE = "GAUGE"
    SUMMARY = "SUMMARY"
    HISTOGRAM = "HISTOGRAM"
    UNTYPED = "UNTYPED"

    @classmethod
    def from_declared(cls, declared: str | None) -> "MetricType":
        """Map a declared ``# TYPE`` value onto a known type, UNTYPED otherwise."""
        if not declared:
            return cls.UNTYPED
        try:
            return cls(declared.upper())
        except ValueError:
            return cls.UNTYPED


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(kw_only=True)
class MetricSample:
    """
    Fields shared by every sample shape.

    Numeric fields hold the exact decimal text from the input. A field left
    as ``None`` was absent in the input and is omitted by ``to_dict``.

    Attributes:
        labels: Label name to value mapping, None when the line had no labels
        timestamp_ms: Millisecond timestamp text, None when not given
    """

    labels: dict[str, str] | None = None
    timestamp_ms: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert sample to a JSON-ready dictionary without absent fields."""
        return _compact({"labels": self.labels, "timestamp_ms": self.timestamp_ms})


@dataclass(kw_only=True)
class CounterSample(MetricSample):
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "value": self.value}


@dataclass(kw_only=True)
class GaugeSample(MetricSample):
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "value": self.value}


@dataclass(kw_only=True)
class UntypedSample(MetricSample):
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), **_compact({"value": self.value})}


@dataclass(kw_only=True)
class SummarySample(MetricSample):
    """One summary series: its quantiles plus count and sum."""

    quantiles: dict[str, str] | None = None
    count: str | None = None
    sum: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            **_compact({"quantiles": self.quantiles, "count": self.count, "sum": self.sum}),
        }


@dataclass(kw_only=True)
class HistogramSample(MetricSample):
    """One histogram series: its cumulative buckets plus count and sum."""

    buckets: dict[str, str] | None = None
    count: str | None = None
    sum: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            **_compact({"buckets": self.buckets, "count": self.count, "sum": self.sum}),
        }


SAMPLE_TYPES: dict[MetricType, type[MetricSample]] = {
    MetricType.COUNTER: CounterSample,
    MetricType.GAUGE: GaugeSample,
    MetricType.SUMMARY: SummarySample,
    MetricType.HISTOGRAM: HistogramSample,
    MetricType.UNTYPED: UntypedSample,
}


def build_sample(metric_type: MetricType, fields: dict[str, Any]) -> MetricSample:
    """
    Build the typed sample for a family type from accumulated fields.

    Fields the sample shape does not carry (for example a raw ``value`` on
    a reassembled histogram series) are dropped.

    Args:
        metric_type: Type of the owning family
        fields: Accumulated sample fields

    Returns:
        Typed sample instance
    """
    sample_cls = SAMPLE_TYPES[metric_type]
    accepted = sample_cls.__dataclass_fields__
    kwargs = {key: value for key, value in fields.items() if key in accepted}
    return sample_cls(**kwargs)


@dataclass
class MetricFamily:
    """
    A named group of samples sharing one HELP/TYPE declaration.

    Attributes:
        name: Metric family name (never empty)
        help: Unescaped HELP text, empty when never declared
        type: Declared type, UNTYPED when never declared
        metrics: Samples in input order
    """

    name: str
    help: str = ""
    type: MetricType = MetricType.UNTYPED
    metrics: list[MetricSample] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert family to a JSON-ready dictionary."""
        return {
            "name": self.name,
            "help": self.help,
            "type": self.type.value,
            "metrics": [sample.to_dict() for sample in self.metrics],
        }


def families_to_dicts(families: list[MetricFamily]) -> list[dict[str, Any]]:
    """Convert parsed families to plain dictionaries for JSON serialization."""
    return [family.to_dict() for family in families]
