"""Line rendering for WriterSink.

Every line has the same skeleton:

    [<timestamp>]: job:<job> event:<event>[ err:<e>][ time:<d>][ kvs:[k:v ...]]
    [<timestamp>]: job:<job> status:<status> time:<d>[ kvs:[k:v ...]]

Log scrapers and tests match on this shape, so field order, separators and
the kvs key ordering must not drift.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime, timezone

from jobhealth.status import CompletionStatus

_NANOS_PER_SECOND = 1_000_000_000


def timestamp(now_ns: int | None = None) -> str:
    """RFC3339 with nanoseconds in UTC, e.g. ``2026-10-16T12:00:00.1234Z``.

    Trailing zeros of the fraction are trimmed and the fraction is dropped
    entirely on a whole second.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    seconds, nanos = divmod(now_ns, _NANOS_PER_SECOND)
    base = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    if nanos:
        base += "." + f"{nanos:09d}".rstrip("0")
    return base + "Z"


def format_duration(nanos: int) -> str:
    """Pick ms, μs or ns by magnitude; values are truncated, never rounded."""
    if nanos > 2_000_000:
        return f"{nanos // 1_000_000} ms"
    if nanos > 2_000:
        return f"{nanos // 1_000} μs"
    return f"{nanos} ns"


def format_kvs(kvs: Mapping[str, str] | None) -> str:
    """Render `` kvs:[a:1 b:2]`` with keys sorted; empty string for None.

    An empty mapping still renders `` kvs:[]``: presence, not size, decides.
    """
    if kvs is None:
        return ""
    pairs = " ".join(f"{key}:{kvs[key]}" for key in sorted(kvs))
    return f" kvs:[{pairs}]"


def render_event(
    job: str,
    event: str,
    kvs: Mapping[str, str] | None = None,
    *,
    err: BaseException | None = None,
    nanos: int | None = None,
    now_ns: int | None = None,
) -> str:
    parts = [f"[{timestamp(now_ns)}]: job:{job} event:{event}"]
    if err is not None:
        parts.append(f" err:{err}")
    if nanos is not None:
        parts.append(f" time:{format_duration(nanos)}")
    parts.append(format_kvs(kvs))
    parts.append("\n")
    return "".join(parts)


def render_completion(
    job: str,
    status: CompletionStatus,
    nanos: int,
    kvs: Mapping[str, str] | None = None,
    *,
    now_ns: int | None = None,
) -> str:
    return (
        f"[{timestamp(now_ns)}]: job:{job} status:{status.text}"
        f" time:{format_duration(nanos)}{format_kvs(kvs)}\n"
    )
