"""Tests for line rendering: timestamps, durations, kvs, full lines."""

from __future__ import annotations

import re

import pytest

from jobhealth.formatting import (
    format_duration,
    format_kvs,
    render_completion,
    render_event,
    timestamp,
)
from jobhealth.status import CompletionStatus

# 1970-01-01T00:00:00.123456789Z
FIXED_NS = 123_456_789
FIXED_STAMP = "1970-01-01T00:00:00.123456789Z"

RFC3339_NANO = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,9})?Z$")


class TestTimestamp:
    def test_nanosecond_precision(self):
        assert timestamp(FIXED_NS) == FIXED_STAMP

    def test_trailing_zeros_trimmed(self):
        assert timestamp(1_500_000_000) == "1970-01-01T00:00:01.5Z"

    def test_whole_second_has_no_fraction(self):
        assert timestamp(0) == "1970-01-01T00:00:00Z"
        assert timestamp(86_400 * 1_000_000_000) == "1970-01-02T00:00:00Z"

    def test_current_time_shape(self):
        assert RFC3339_NANO.match(timestamp())


class TestFormatDuration:
    @pytest.mark.parametrize(
        "nanos,expected",
        [
            (0, "0 ns"),
            (500, "500 ns"),
            (2_000, "2000 ns"),
            (2_001, "2 μs"),
            (234_203, "234 μs"),
            (1_204_000, "1204 μs"),
            (2_000_000, "2000 μs"),
            (2_000_001, "2 ms"),
            (34_567_890, "34 ms"),
            (5_999_999_999, "5999 ms"),
        ],
    )
    def test_unit_selection_and_truncation(self, nanos, expected):
        assert format_duration(nanos) == expected


class TestFormatKvs:
    def test_none_renders_nothing(self):
        assert format_kvs(None) == ""

    def test_empty_mapping_renders_empty_brackets(self):
        assert format_kvs({}) == " kvs:[]"

    def test_keys_sorted(self):
        assert format_kvs({"wat": "ok", "another": "thing"}) == " kvs:[another:thing wat:ok]"

    def test_insertion_order_does_not_matter(self):
        keys = ["zeta", "alpha", "mid", "Beta", "level"]
        forward = {k: k.upper() for k in keys}
        backward = {k: k.upper() for k in reversed(keys)}
        assert format_kvs(forward) == format_kvs(backward)
        assert format_kvs(forward) == " kvs:[Beta:BETA alpha:ALPHA level:LEVEL mid:MID zeta:ZETA]"

    def test_single_entry_has_no_trailing_space(self):
        assert format_kvs({"k": "v"}) == " kvs:[k:v]"


class TestRenderLines:
    def test_plain_event(self):
        line = render_event("myjob", "myevent", now_ns=FIXED_NS)
        assert line == f"[{FIXED_STAMP}]: job:myjob event:myevent\n"

    def test_event_with_error_and_kvs(self):
        line = render_event(
            "myjob", "myevent", {"b": "2", "a": "1"}, err=ValueError("bad row"), now_ns=FIXED_NS
        )
        assert line == f"[{FIXED_STAMP}]: job:myjob event:myevent err:bad row kvs:[a:1 b:2]\n"

    def test_timing_event(self):
        line = render_event("myjob", "myevent", nanos=1_204_000, now_ns=FIXED_NS)
        assert line == f"[{FIXED_STAMP}]: job:myjob event:myevent time:1204 μs\n"

    def test_completion(self):
        line = render_completion(
            "myjob",
            CompletionStatus.SUCCESS,
            34_567_890,
            {"wat": "ok", "another": "thing"},
            now_ns=FIXED_NS,
        )
        assert line == (
            f"[{FIXED_STAMP}]: job:myjob status:success time:34 ms kvs:[another:thing wat:ok]\n"
        )

    def test_exactly_one_newline(self):
        line = render_event("j", "e", {}, now_ns=FIXED_NS)
        assert line.endswith("kvs:[]\n")
        assert line.count("\n") == 1
