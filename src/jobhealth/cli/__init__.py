"""jobhealth CLI -- emit job event lines from shell scripts and cron jobs.

Commands:
    jobhealth event JOB EVENT               Plain event
    jobhealth error JOB EVENT MESSAGE       Event annotated with an error
    jobhealth timing JOB EVENT NANOS        Event annotated with elapsed time
    jobhealth complete JOB STATUS NANOS     Job outcome with elapsed time
    jobhealth parse-level TEXT              Print the canonical level name

Lines go to stdout in exactly the format WriterSink writes them.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

import typer

from jobhealth.cli._errors import handle_error
from jobhealth.config import SinkConfig
from jobhealth.errors import UnknownLogLevelError
from jobhealth.levels import LogLevel
from jobhealth.sinks.base import ByteStream
from jobhealth.sinks.writer_sink import WriterSink
from jobhealth.status import CompletionStatus

app = typer.Typer(
    name="jobhealth",
    help="Write job event lines (events, errors, timings, completions) to stdout.",
    no_args_is_help=True,
)

_KV_HELP = "Metadata as key=value; repeatable. Use level=<lvl> to tag the event."
_THRESHOLD_HELP = "Minimum level for tagged events (default: $JOBHEALTH_LEVEL or trace)."


class _TextStreamAdapter:
    """Byte writes onto a text stream that has no binary buffer."""

    def __init__(self, text_stream: TextIO) -> None:
        self._text_stream = text_stream

    def write(self, data: bytes) -> int:
        return self._text_stream.write(data.decode("utf-8"))


def _stdout_stream() -> ByteStream:
    buffer = getattr(sys.stdout, "buffer", None)
    return buffer if buffer is not None else _TextStreamAdapter(sys.stdout)


def _parse_kvs(pairs: Optional[list[str]]) -> dict[str, str] | None:
    if not pairs:
        return None
    kvs: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            handle_error(f"Invalid --kv {pair!r}; expected key=value")
        kvs[key] = value
    return kvs


def _make_sink(threshold: Optional[str]) -> WriterSink:
    cfg = SinkConfig() if threshold is None else SinkConfig(level=threshold)
    try:
        return WriterSink.from_config(_stdout_stream(), cfg)
    except UnknownLogLevelError as e:
        handle_error(str(e))


@app.command("event")
def event_cmd(
    job: str = typer.Argument(..., help="Job name"),
    event: str = typer.Argument(..., help="Event name"),
    kv: Optional[list[str]] = typer.Option(None, "--kv", help=_KV_HELP),
    threshold: Optional[str] = typer.Option(None, "--threshold", "-t", help=_THRESHOLD_HELP),
) -> None:
    """Emit a plain event."""
    kvs = _parse_kvs(kv)
    _make_sink(threshold).emit_event(job, event, kvs)


@app.command("error")
def error_cmd(
    job: str = typer.Argument(..., help="Job name"),
    event: str = typer.Argument(..., help="Event name"),
    message: str = typer.Argument(..., help="Error text"),
    kv: Optional[list[str]] = typer.Option(None, "--kv", help=_KV_HELP),
    threshold: Optional[str] = typer.Option(None, "--threshold", "-t", help=_THRESHOLD_HELP),
) -> None:
    """Emit an event annotated with an error message."""
    kvs = _parse_kvs(kv)
    _make_sink(threshold).emit_event_err(job, event, RuntimeError(message), kvs)


@app.command("timing")
def timing_cmd(
    job: str = typer.Argument(..., help="Job name"),
    event: str = typer.Argument(..., help="Event name"),
    nanos: int = typer.Argument(..., min=0, help="Elapsed time in nanoseconds"),
    kv: Optional[list[str]] = typer.Option(None, "--kv", help=_KV_HELP),
    threshold: Optional[str] = typer.Option(None, "--threshold", "-t", help=_THRESHOLD_HELP),
) -> None:
    """Emit an event annotated with elapsed time."""
    kvs = _parse_kvs(kv)
    _make_sink(threshold).emit_timing(job, event, nanos, kvs)


@app.command("complete")
def complete_cmd(
    job: str = typer.Argument(..., help="Job name"),
    status: str = typer.Argument(
        ..., help="success | validation_error | panic | error | junk"
    ),
    nanos: int = typer.Argument(..., min=0, help="Elapsed time in nanoseconds"),
    kv: Optional[list[str]] = typer.Option(None, "--kv", help=_KV_HELP),
    threshold: Optional[str] = typer.Option(None, "--threshold", "-t", help=_THRESHOLD_HELP),
) -> None:
    """Emit a job completion record.

    Examples:
        jobhealth complete nightly_backup success 34567890 --kv host=db1
        jobhealth complete import_users error 1204000 -t info
    """
    completion = CompletionStatus.parse(status)
    if completion is None:
        valid = ", ".join(s.text for s in CompletionStatus)
        handle_error(f"Unknown status {status!r}. Valid: {valid}")
    kvs = _parse_kvs(kv)
    _make_sink(threshold).emit_complete(job, completion, nanos, kvs)


@app.command("parse-level")
def parse_level_cmd(text: str = typer.Argument(..., help="Level text, any case")) -> None:
    """Print the canonical form of a level, or fail if it isn't one."""
    level = LogLevel.parse(text)
    if level is None:
        handle_error(f"No LogLevel found for {text!r}")
    typer.echo(level.text)


def main() -> None:
    """Entry point for the jobhealth CLI."""
    app()
