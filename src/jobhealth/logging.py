"""Diagnostics logging: swappable formatter × destination via config.

This is where jobhealth reports on itself, for example a stream whose write
failed. It never carries the sink's own event lines, and it never touches
process-wide logging state: structlog is not configured globally and the
root logger is left alone. Everything hangs off the ``jobhealth`` logger.

    JOBHEALTH_DIAG_FORMATTER=structlog | stdlib
    JOBHEALTH_DIAG_DESTINATION=stderr | file   (file needs JOBHEALTH_DIAG_PATH)

Custom strategies plug in with register_formatter() / register_destination().
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jobhealth.config import SinkConfig

LOGGER_NAME = "jobhealth"


@runtime_checkable
class DiagFormatter(Protocol):
    def setup(self, config: SinkConfig) -> logging.Formatter: ...

    def get_logger(self, name: str, **kwargs: Any) -> Any: ...


@runtime_checkable
class DiagDestination(Protocol):
    def create_handler(self, formatter: logging.Formatter) -> logging.Handler: ...

    def shutdown(self) -> None: ...


class _FieldsAdapter(logging.LoggerAdapter):
    """Stdlib logger that takes ``warning("event", key=value)``.

    The keyword fields travel on the LogRecord as ``record.fields``.
    """

    _PASSTHROUGH = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        fields = dict(self.extra or {})
        fields.update({k: kwargs.pop(k) for k in list(kwargs) if k not in self._PASSTHROUGH})
        kwargs["extra"] = {**(kwargs.get("extra") or {}), "fields": fields}
        return msg, kwargs


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **getattr(record, "fields", {}),
        }
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class StructlogFormatter:
    """structlog rendering bound to jobhealth's own loggers only.

    The processor chain is attached per logger with structlog.wrap_logger(),
    so a host application's structlog.configure() stays in force.
    """

    def __init__(self) -> None:
        self._processors: list = []

    def setup(self, config: SinkConfig) -> logging.Formatter:
        import structlog

        self._processors = [
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
        if config.diag_format == "console":
            renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
        else:
            renderer = structlog.processors.JSONRenderer()
        return structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        import structlog

        return structlog.wrap_logger(
            logging.getLogger(name),
            processors=self._processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=False,
            **kwargs,
        )


class StdlibFormatter:
    """Plain logging.Formatter: a JSON line, or a console line."""

    def setup(self, config: SinkConfig) -> logging.Formatter:
        if config.diag_format == "console":
            return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        return _JsonLineFormatter()

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        return _FieldsAdapter(logging.getLogger(name), kwargs)


class StderrDestination:
    def __init__(self, config: SinkConfig | None = None) -> None:
        pass

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        return handler

    def shutdown(self) -> None:
        pass


class FileDestination:
    """Append diagnostics to ``diag_path``, one record per line."""

    def __init__(self, config: SinkConfig) -> None:
        if not config.diag_path:
            raise ValueError("file diagnostics destination requires diag_path")
        self._path = Path(config.diag_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._handler: logging.Handler | None = None

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        self._handler = logging.FileHandler(self._path, mode="a", encoding="utf-8")
        self._handler.setFormatter(formatter)
        return self._handler

    def shutdown(self) -> None:
        if self._handler is not None:
            self._handler.close()
            self._handler = None


_FORMATTERS: dict[str, type] = {"structlog": StructlogFormatter, "stdlib": StdlibFormatter}
_DESTINATIONS: dict[str, type] = {"stderr": StderrDestination, "file": FileDestination}


def register_formatter(name: str, cls: type) -> None:
    """Register a custom diagnostics formatter. Call before setup_diagnostics()."""
    _FORMATTERS[name] = cls


def register_destination(name: str, cls: type) -> None:
    """Register a custom destination; its constructor receives the SinkConfig."""
    _DESTINATIONS[name] = cls


_active_formatter: DiagFormatter | None = None
_active_destination: DiagDestination | None = None


def _resolve(registry: dict[str, type], name: str, kind: str, hint: str) -> type:
    cls = registry.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown diagnostics {kind}: {name!r}. Available: {list(registry)}. "
            f"Register custom ones with {hint}()."
        )
    return cls


def _detach_managed_handlers() -> logging.Logger:
    pkg_logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in pkg_logger.handlers if getattr(h, "_jobhealth_managed", False)]:
        pkg_logger.removeHandler(old)
    return pkg_logger


def setup_diagnostics(config: SinkConfig) -> None:
    """Compose formatter × destination from config onto the jobhealth logger.

    Calling it again replaces the previous managed handler; handlers added
    by anyone else are kept.
    """
    global _active_formatter, _active_destination

    formatter = _resolve(_FORMATTERS, config.diag_formatter, "formatter", "register_formatter")()
    destination = _resolve(
        _DESTINATIONS, config.diag_destination, "destination", "register_destination"
    )(config)

    handler = destination.create_handler(formatter.setup(config))
    handler._jobhealth_managed = True  # type: ignore[attr-defined]

    pkg_logger = _detach_managed_handlers()
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, config.diag_level.upper(), logging.WARNING))

    if _active_destination is not None:
        _active_destination.shutdown()
    _active_formatter = formatter
    _active_destination = destination


def get_logger(name: str = LOGGER_NAME, **kwargs: Any) -> Any:
    """A logger taking ``warning("event", key=value)``, before or after setup."""
    if _active_formatter is not None:
        return _active_formatter.get_logger(name, **kwargs)
    return _FieldsAdapter(logging.getLogger(name), kwargs)


def shutdown_diagnostics() -> None:
    """Close the active destination and detach its handler."""
    global _active_formatter, _active_destination

    _detach_managed_handlers().setLevel(logging.NOTSET)
    if _active_destination is not None:
        _active_destination.shutdown()
    _active_formatter = None
    _active_destination = None
