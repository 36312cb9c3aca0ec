"""Terminal job outcomes rendered in completion lines."""

from __future__ import annotations

from enum import Enum


class CompletionStatus(Enum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    PANIC = "panic"
    ERROR = "error"
    JUNK = "junk"

    @property
    def text(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: object) -> CompletionStatus | None:
        if not isinstance(text, str):
            return None
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None
