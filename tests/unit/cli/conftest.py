"""Pytest fixtures for CLI tests."""
import logging

import pytest
import structlog

import promtext.config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Give every CLI test default settings and no user config file."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("LOG_LEVEL", "LOG_FORMAT", "MAX_INPUT_BYTES", "JSON_INDENT", "SORT_FAMILIES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    promtext.config.reset_settings()

    yield

    promtext.config.reset_settings()
    # setup_logging binds handlers to the runner's captured stderr
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    structlog.reset_defaults()


@pytest.fixture
def exposition_file(tmp_path):
    """Write a small exposition payload to disk."""
    path = tmp_path / "metrics.txt"
    path.write_text(
        "# HELP up Target is up.\n"
        "# TYPE up gauge\n"
        'up{job="node"} 1\n'
        "# TYPE latency histogram\n"
        'latency_bucket{le="0.1"} 5\n'
        'latency_bucket{le="+Inf"} 10\n'
        "latency_count 10\n"
        "latency_sum 3.5\n"
    )
    return path
