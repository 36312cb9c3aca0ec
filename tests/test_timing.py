"""Tests for the timed() context manager."""

from __future__ import annotations

import pytest

from jobhealth.sinks import WriterSink
from jobhealth.timing import timed


class _StubClock:
    def __init__(self, *readings: int) -> None:
        self._readings = list(readings)

    def __call__(self) -> int:
        return self._readings.pop(0)


class _SpySink:
    def __init__(self) -> None:
        self.timings: list[tuple] = []

    def emit_timing(self, job, event, nanos, kvs=None):
        self.timings.append((job, event, nanos, kvs))


class TestTimed:
    def test_emits_elapsed(self):
        sink = _SpySink()
        with timed(sink, "myjob", "fetch", {"page": "3"}, clock=_StubClock(1_000, 35_568_890)):
            pass
        assert sink.timings == [("myjob", "fetch", 35_567_890, {"page": "3"})]

    def test_emits_when_block_raises(self):
        sink = _SpySink()
        with pytest.raises(KeyError):
            with timed(sink, "myjob", "fetch", clock=_StubClock(0, 500)):
                raise KeyError("missing")
        assert sink.timings == [("myjob", "fetch", 500, None)]

    def test_never_negative(self):
        sink = _SpySink()
        with timed(sink, "myjob", "fetch", clock=_StubClock(10, 5)):
            pass
        assert sink.timings[0][2] == 0

    def test_writes_timing_line(self, buf):
        with timed(WriterSink(buf), "myjob", "fetch", clock=_StubClock(0, 34_567_890)):
            pass
        assert buf.getvalue().decode("utf-8").endswith(" job:myjob event:fetch time:34 ms\n")

    def test_real_clock(self, buf):
        with timed(WriterSink(buf), "myjob", "noop"):
            pass
        assert b" time:" in buf.getvalue()
