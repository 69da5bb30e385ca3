"""Exposition parsing commands for promtext.

This module provides CLI commands that read a Prometheus text exposition
payload from a file or stdin, parse it, and print the metric families as
JSON or as a summary table.
"""

import sys
from pathlib import Path

import typer

from promtext.cli.output import print_error, print_json, print_success, print_table
from promtext.config import get_settings
from promtext.exceptions import InputTooLargeError, InvalidLineError, PromTextError
from promtext.exposition import MetricFamily, families_to_dicts, parse_prometheus_text_format
from promtext.logging_config import get_logger, log_error

logger = get_logger(__name__)

STDIN_SOURCE = "-"


def read_source(source: str, max_bytes: int) -> str:
    """
    Read exposition text from a path or stdin.

    Args:
        source: File path, or "-" for stdin
        max_bytes: Largest accepted payload in bytes

    Returns:
        Decoded payload

    Raises:
        InputTooLargeError: If the payload exceeds max_bytes
        FileNotFoundError: If the path does not exist
    """
    if source == STDIN_SOURCE:
        data = sys.stdin.buffer.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise InputTooLargeError(len(data), max_bytes)
    else:
        path = Path(source)
        size = path.stat().st_size
        if size > max_bytes:
            raise InputTooLargeError(size, max_bytes)
        data = path.read_bytes()

    return data.decode("utf-8")


def _summary_rows(families: list[MetricFamily]) -> list[dict[str, str]]:
    return [
        {
            "name": family.name,
            "type": family.type.value,
            "samples": str(len(family.metrics)),
            "help": family.help,
        }
        for family in families
    ]


def _load_families(source: str) -> list[MetricFamily]:
    settings = get_settings()
    text = read_source(source, settings.max_input_bytes)
    logger.debug("parsing_exposition", source=source, size=len(text))
    return parse_prometheus_text_format(text)


def parse(
    source: str = typer.Argument(
        STDIN_SOURCE,
        help="Exposition file to parse, '-' for stdin",
    ),
    output: str = typer.Option(
        "json",
        "--output",
        "-o",
        help="Output format: json, table",
    ),
    sort: bool = typer.Option(
        False,
        "--sort",
        help="Sort families by name",
    ),
) -> None:
    """
    Parse Prometheus text exposition into metric families.

    Prints the families as JSON (one object per family with name, help,
    type and metrics) or as a table with one row per family.

    Examples:
        promtext parse metrics.txt

        curl -s localhost:9100/metrics | promtext parse - --output table
    """
    if output not in ("json", "table"):
        print_error(f"Invalid output format: {output}")
        raise typer.Exit(1)

    settings = get_settings()
    try:
        families = _load_families(source)
    except (PromTextError, OSError, UnicodeDecodeError) as e:
        log_error(logger, e, "parse", source=source)
        print_error(f"Failed to parse {source}: {getattr(e, 'message', str(e))}")
        raise typer.Exit(1)

    if sort or settings.sort_families:
        families = sorted(families, key=lambda family: family.name)

    if output == "table":
        print_table(
            _summary_rows(families),
            title="Metric Families",
            columns=["name", "type", "samples", "help"],
        )
    else:
        print_json(families_to_dicts(families), indent=settings.json_indent)


def validate(
    source: str = typer.Argument(
        STDIN_SOURCE,
        help="Exposition file to check, '-' for stdin",
    ),
) -> None:
    """
    Check that a payload parses as Prometheus text exposition.

    Exits with status 1 and reports the first invalid line otherwise.
    """
    try:
        families = _load_families(source)
    except InvalidLineError as e:
        log_error(logger, e, "validate", source=source, reason=e.reason)
        print_error(e.message)
        if e.reason:
            print_error(f"Reason: {e.reason}")
        raise typer.Exit(1)
    except (PromTextError, OSError, UnicodeDecodeError) as e:
        log_error(logger, e, "validate", source=source)
        print_error(f"Failed to read {source}: {getattr(e, 'message', str(e))}")
        raise typer.Exit(1)

    sample_count = sum(len(family.metrics) for family in families)
    print_success(
        f"Valid exposition: {len(families)} metric families, {sample_count} samples"
    )
