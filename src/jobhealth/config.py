"""Sink configuration, env-var driven.

All settings have safe defaults; nothing needs to be set for a sink that
logs everything and reports its own problems as JSON on stderr.

    Sink threshold:    JOBHEALTH_LEVEL=trace (default) | debug | info | error
    Diagnostics:       JOBHEALTH_DIAG_FORMATTER=structlog (default) | stdlib
                       JOBHEALTH_DIAG_DESTINATION=stderr (default) | file
                       JOBHEALTH_DIAG_LEVEL=WARNING
                       JOBHEALTH_DIAG_FORMAT=json (default) | console
                       JOBHEALTH_DIAG_PATH=/path/to/diagnostics.log
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from jobhealth.levels import LogLevel


@dataclass
class SinkConfig:
    """Sink threshold plus settings for the library's own diagnostics."""

    level: str = field(default_factory=lambda: os.environ.get("JOBHEALTH_LEVEL", "trace"))

    # --- Diagnostics: formatter × destination ---
    diag_formatter: str = field(
        default_factory=lambda: os.environ.get("JOBHEALTH_DIAG_FORMATTER", "structlog")
    )  # "structlog" | "stdlib"

    diag_destination: str = field(
        default_factory=lambda: os.environ.get("JOBHEALTH_DIAG_DESTINATION", "stderr")
    )  # "stderr" | "file"

    diag_level: str = field(
        default_factory=lambda: os.environ.get("JOBHEALTH_DIAG_LEVEL", "WARNING")
    )

    diag_format: str = field(
        default_factory=lambda: os.environ.get("JOBHEALTH_DIAG_FORMAT", "json")
    )  # "json" | "console"

    diag_path: str | None = field(
        default_factory=lambda: os.environ.get("JOBHEALTH_DIAG_PATH")
    )

    @property
    def threshold(self) -> LogLevel:
        """The configured level; raises UnknownLogLevelError on a typo."""
        return LogLevel.from_text(self.level)
