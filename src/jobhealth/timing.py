"""Measure a block and emit it as a timing event."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager

from jobhealth.sinks.base import Sink


@contextmanager
def timed(
    sink: Sink,
    job: str,
    event: str,
    kvs: Mapping[str, str] | None = None,
    *,
    clock: Callable[[], int] = time.perf_counter_ns,
) -> Iterator[None]:
    """Emit ``sink.emit_timing`` with the block's elapsed nanoseconds.

    The timing is emitted even if the block raises; the exception is not
    swallowed.

        with timed(sink, "import_users", "fetch_page", {"page": "3"}):
            fetch_page(3)
    """
    start_ns = clock()
    try:
        yield
    finally:
        sink.emit_timing(job, event, max(clock() - start_ns, 0), kvs)
