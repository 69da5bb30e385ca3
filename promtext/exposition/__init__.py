"""Prometheus text exposition format support for promtext.

This module parses the line-oriented Prometheus text format into metric
families, reassembling summary and histogram series from their quantile,
bucket, count and sum lines.
"""

from promtext.exposition.escaping import unescape_help, unescape_label_value
from promtext.exposition.flatten import flatten_samples
from promtext.exposition.models import (
    CounterSample,
    GaugeSample,
    HistogramSample,
    MetricFamily,
    MetricSample,
    MetricType,
    SummarySample,
    UntypedSample,
    families_to_dicts,
)
from promtext.exposition.parser import parse_prometheus_text_format
from promtext.exposition.sample_line import ParsedSample, labels_equal, parse_sample_line

__all__ = [
    "CounterSample",
    "GaugeSample",
    "HistogramSample",
    "MetricFamily",
    "MetricSample",
    "MetricType",
    "ParsedSample",
    "SummarySample",
    "UntypedSample",
    "families_to_dicts",
    "flatten_samples",
    "labels_equal",
    "parse_prometheus_text_format",
    "parse_sample_line",
    "unescape_help",
    "unescape_label_value",
]
