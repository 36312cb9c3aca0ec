"""No-op sink: stands in when event output is disabled."""

from __future__ import annotations

from collections.abc import Mapping

from jobhealth.status import CompletionStatus


class NoOpSink:
    """Discards every emission."""

    def emit_event(self, job: str, event: str, kvs: Mapping[str, str] | None = None) -> None:
        pass

    def emit_event_err(
        self,
        job: str,
        event: str,
        err: BaseException,
        kvs: Mapping[str, str] | None = None,
    ) -> None:
        pass

    def emit_timing(
        self, job: str, event: str, nanos: int, kvs: Mapping[str, str] | None = None
    ) -> None:
        pass

    def emit_complete(
        self,
        job: str,
        status: CompletionStatus,
        nanos: int,
        kvs: Mapping[str, str] | None = None,
    ) -> None:
        pass
