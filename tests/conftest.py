"""Shared fixtures for jobhealth tests."""

from __future__ import annotations

import io

import pytest

# 1970-01-01T00:00:00.123456789Z
FIXED_NS = 123_456_789


@pytest.fixture(autouse=True)
def _reset_diagnostics(monkeypatch):
    """Start every test with unconfigured diagnostics and no env overrides."""
    from jobhealth.logging import shutdown_diagnostics

    for var in (
        "JOBHEALTH_LEVEL",
        "JOBHEALTH_DIAG_FORMATTER",
        "JOBHEALTH_DIAG_DESTINATION",
        "JOBHEALTH_DIAG_LEVEL",
        "JOBHEALTH_DIAG_FORMAT",
        "JOBHEALTH_DIAG_PATH",
    ):
        monkeypatch.delenv(var, raising=False)
    shutdown_diagnostics()
    yield
    shutdown_diagnostics()


@pytest.fixture()
def buf() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NS
