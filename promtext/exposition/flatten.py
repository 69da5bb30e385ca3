"""Reassembly of summary and histogram samples into one sample per series."""

from typing import Any

RawSample = dict[str, Any]


def series_key(labels: dict[str, str] | None, key_label: str) -> tuple[tuple[str, str], ...]:
    """Order-independent identity of a series: its labels minus ``key_label``."""
    if not labels:
        return ()
    return tuple(sorted((name, value) for name, value in labels.items() if name != key_label))


def flatten_samples(
    samples: list[RawSample],
    group_field: str,
    key_label: str,
    value_field: str,
) -> list[RawSample]:
    """
    Group flat summary or histogram samples into one sample per series.

    Each input sample is one quantile, bucket, count or sum line (already
    merged where consecutive lines shared labels). Samples are grouped by
    their labels without ``key_label``; every group collects
    ``labels[key_label] -> sample[value_field]`` into ``group_field`` and
    keeps the last ``count`` and ``sum`` seen.

    Args:
        samples: Accumulated samples of one family
        group_field: Output mapping field, ``buckets`` or ``quantiles``
        key_label: Label enumerating sub-measurements, ``le`` or ``quantile``
        value_field: Sample field holding the sub-measurement value

    Returns:
        One sample per series in first-seen order, or ``samples`` unchanged
        when there is nothing to group

    Example:
        >>> flatten_samples(
        ...     [
        ...         {"labels": {"le": "0.1"}, "bucket": "5"},
        ...         {"labels": {"le": "+Inf"}, "bucket": "10"},
        ...         {"count": "10", "sum": "3.5"},
        ...     ],
        ...     "buckets",
        ...     "le",
        ...     "bucket",
        ... )
        [{'buckets': {'0.1': '5', '+Inf': '10'}, 'count': '10', 'sum': '3.5'}]
    """
    groups: dict[tuple[tuple[str, str], ...], dict[str, Any]] = {}

    for sample in samples:
        labels = sample.get("labels")
        key = series_key(labels, key_label)

        group = groups.get(key)
        if group is None:
            other_labels = {
                name: value for name, value in (labels or {}).items() if name != key_label
            }
            group = groups[key] = {
                "labels": other_labels or None,
                "entries": {},
                "count": None,
                "sum": None,
            }

        key_value = labels.get(key_label) if labels else None
        entry_value = sample.get(value_field)
        if key_value and entry_value:
            group["entries"][key_value] = entry_value

        if sample.get("count") is not None:
            group["count"] = sample["count"]
        if sample.get("sum") is not None:
            group["sum"] = sample["sum"]

    if not groups:
        return samples

    flattened = []
    for group in groups.values():
        metric: RawSample = {}
        if group["entries"]:
            metric[group_field] = group["entries"]
        if group["labels"]:
            metric["labels"] = group["labels"]
        if group["count"] is not None:
            metric["count"] = group["count"]
        if group["sum"] is not None:
            metric["sum"] = group["sum"]
        flattened.append(metric)

    return flattened
