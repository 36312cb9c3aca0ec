"""Sink and ByteStream protocols."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from jobhealth.status import CompletionStatus


@runtime_checkable
class ByteStream(Protocol):
    """Anything a rendered line can be written to in one call.

    Binary files, ``sys.stdout.buffer``, sockets wrapped with makefile("wb")
    and io.BytesIO all qualify.  write() may raise; sinks absorb it.
    """

    def write(self, data: bytes, /) -> object: ...


@runtime_checkable
class Sink(Protocol):
    """What an event-dispatch facility fans out to."""

    def emit_event(
        self, job: str, event: str, kvs: Mapping[str, str] | None = None
    ) -> None: ...

    def emit_event_err(
        self,
        job: str,
        event: str,
        err: BaseException,
        kvs: Mapping[str, str] | None = None,
    ) -> None: ...

    def emit_timing(
        self, job: str, event: str, nanos: int, kvs: Mapping[str, str] | None = None
    ) -> None: ...

    def emit_complete(
        self,
        job: str,
        status: CompletionStatus,
        nanos: int,
        kvs: Mapping[str, str] | None = None,
    ) -> None: ...
