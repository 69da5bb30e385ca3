"""promtext: Prometheus text exposition format parser."""

from importlib.metadata import PackageNotFoundError, version

from promtext.exceptions import InvalidLineError, PromTextError
from promtext.exposition import (
    MetricFamily,
    MetricType,
    families_to_dicts,
    parse_prometheus_text_format,
)

try:
    __version__ = version("promtext")
except PackageNotFoundError:
    # Package is not installed, use fallback
    __version__ = "0.0.0.dev"


def __getattr__(name):
    """Lazy import of cli_app to avoid circular imports."""
    if name == "cli_app":
        from promtext.cli import app as cli_app

        return cli_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "cli_app",
    "InvalidLineError",
    "MetricFamily",
    "MetricType",
    "PromTextError",
    "families_to_dicts",
    "parse_prometheus_text_format",
]
