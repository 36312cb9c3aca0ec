"""Severity levels: TRACE < DEBUG < INFO < ERROR.

Each level has one canonical lowercase text form. That text is what gets
rendered, and it is what callers put under the reserved ``"level"`` key
of an event's kvs to have a sink filter that single event.
"""

from __future__ import annotations

from enum import IntEnum

from jobhealth.errors import UnknownLogLevelError


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    ERROR = 3

    @property
    def text(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.text

    def __format__(self, format_spec: str) -> str:
        # IntEnum would otherwise format as the bare integer
        return format(self.text, format_spec)

    @classmethod
    def parse(cls, text: object) -> LogLevel | None:
        """Case-insensitive lookup; None for anything that isn't a level."""
        if not isinstance(text, str):
            return None
        return _BY_TEXT.get(text.strip().lower())

    @classmethod
    def from_text(cls, text: object) -> LogLevel:
        """Strict parse for configuration: raises UnknownLogLevelError."""
        level = cls.parse(text)
        if level is None:
            raise UnknownLogLevelError(text)
        return level


_BY_TEXT: dict[str, LogLevel] = {level.text: level for level in LogLevel}
