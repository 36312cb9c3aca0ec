"""Sinks: destinations for rendered job events."""

from jobhealth.sinks.base import ByteStream, Sink
from jobhealth.sinks.noop_sink import NoOpSink
from jobhealth.sinks.writer_sink import WriterSink

__all__ = ["ByteStream", "Sink", "NoOpSink", "WriterSink"]
