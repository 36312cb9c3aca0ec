"""Exceptions raised by jobhealth."""

from __future__ import annotations


class JobHealthError(Exception):
    """Base class for jobhealth errors."""


class UnknownLogLevelError(JobHealthError, ValueError):
    """Raised by strict level parsing when the text names no LogLevel."""

    def __init__(self, text: object) -> None:
        super().__init__(f"No LogLevel found for {text!r}")
        self.text = text
