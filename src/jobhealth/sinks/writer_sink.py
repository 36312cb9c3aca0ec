"""Writer sink: human-readable event lines on any byte stream.

To stdout:
    WriterSink(sys.stdout.buffer)
To a file shared with other writers:
    WriterSink(open(path, "ab"), LogLevel.INFO)
To a socket:
    WriterSink(sock.makefile("wb", buffering=0), LogLevel.INFO)

The sink keeps no state besides the stream and threshold it was built with,
so one instance can be shared across threads as long as the stream's own
write() is safe to call concurrently.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping

from jobhealth.config import SinkConfig
from jobhealth.formatting import render_completion, render_event
from jobhealth.levels import LogLevel
from jobhealth.logging import get_logger
from jobhealth.sinks.base import ByteStream
from jobhealth.status import CompletionStatus

LEVEL_KEY = "level"


class WriterSink:
    """Renders events as text lines and writes each with a single write()."""

    __slots__ = ("stream", "level", "_clock")

    def __init__(
        self,
        stream: ByteStream,
        level: LogLevel = LogLevel.TRACE,
        *,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self.stream = stream
        self.level = LogLevel(level)
        self._clock = clock

    @classmethod
    def from_config(cls, stream: ByteStream, config: SinkConfig | None = None) -> WriterSink:
        cfg = config or SinkConfig()
        return cls(stream, cfg.threshold)

    def should_log_event(self, kvs: Mapping[str, str] | None) -> bool:
        """Only an event tagged with a parseable level below ours is dropped."""
        if kvs is None or LEVEL_KEY not in kvs:
            return True
        event_level = LogLevel.parse(kvs[LEVEL_KEY])
        if event_level is None:
            # unknown levels are logged rather than lost
            return True
        return event_level >= self.level

    def emit_event(self, job: str, event: str, kvs: Mapping[str, str] | None = None) -> None:
        if not self.should_log_event(kvs):
            return
        self._write(job, render_event(job, event, kvs, now_ns=self._clock()))

    def emit_event_err(
        self,
        job: str,
        event: str,
        err: BaseException,
        kvs: Mapping[str, str] | None = None,
    ) -> None:
        if err is None:
            raise TypeError("emit_event_err() requires an exception, got None")
        if not self.should_log_event(kvs):
            return
        self._write(job, render_event(job, event, kvs, err=err, now_ns=self._clock()))

    def emit_timing(
        self, job: str, event: str, nanos: int, kvs: Mapping[str, str] | None = None
    ) -> None:
        if not self.should_log_event(kvs):
            return
        self._write(job, render_event(job, event, kvs, nanos=nanos, now_ns=self._clock()))

    def emit_complete(
        self,
        job: str,
        status: CompletionStatus,
        nanos: int,
        kvs: Mapping[str, str] | None = None,
    ) -> None:
        if not self.should_log_event(kvs):
            return
        self._write(job, render_completion(job, status, nanos, kvs, now_ns=self._clock()))

    def _write(self, job: str, line: str) -> None:
        try:
            self.stream.write(line.encode("utf-8"))
        except Exception as exc:
            # fire-and-forget: a broken stream must not break the caller
            get_logger(__name__).warning(
                "sink.write_failed",
                job=job,
                error_type=type(exc).__name__,
                error=str(exc),
            )

    def __repr__(self) -> str:
        return f"WriterSink(stream={self.stream!r}, level={self.level.text!r})"
