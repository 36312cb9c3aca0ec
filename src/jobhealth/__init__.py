"""jobhealth: human-readable job event lines with severity filtering.

Public API:
    WriterSink(stream, level)    render events to a byte stream
    LogLevel                     TRACE < DEBUG < INFO < ERROR
    CompletionStatus             terminal job outcomes
    timed(sink, job, event)      emit a timing event for a block

Diagnostics (the library's own logging):
    setup_diagnostics(cfg)       wire formatter × destination from SinkConfig
    get_logger(name)             structured logger
"""

from jobhealth.config import SinkConfig
from jobhealth.errors import JobHealthError, UnknownLogLevelError
from jobhealth.formatting import format_duration, format_kvs, timestamp
from jobhealth.levels import LogLevel
from jobhealth.logging import get_logger, setup_diagnostics, shutdown_diagnostics
from jobhealth.sinks import ByteStream, NoOpSink, Sink, WriterSink
from jobhealth.status import CompletionStatus
from jobhealth.timing import timed

__all__ = [
    # Sinks
    "WriterSink",
    "NoOpSink",
    "Sink",
    "ByteStream",
    # Model
    "LogLevel",
    "CompletionStatus",
    # Formatting
    "format_duration",
    "format_kvs",
    "timestamp",
    # Timing
    "timed",
    # Config / errors
    "SinkConfig",
    "JobHealthError",
    "UnknownLogLevelError",
    # Diagnostics
    "get_logger",
    "setup_diagnostics",
    "shutdown_diagnostics",
]
