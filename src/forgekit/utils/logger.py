"""Process-wide logging facade.

Every diagnostic line the application prints goes through this module.
The facade decides, per call, whether a record is emitted and through
which underlying :class:`logging.Logger` ("sink"):

* :func:`log` routes through the process-wide sink.
* :func:`obj_log` first resolves a sink bound to an owner object — via
  its ``get_logger()`` method (:class:`HasLogger`), else its ``logger``
  attribute — and falls back to the process-wide sink otherwise.

Filtering
---------
FATAL and PANIC always pass.  Any other severity passes only when its
rank is at least the configured threshold.  Debug mode lets everything
through.  A suppressed record is replaced by one DEBUG record carrying
the suppressed text under ``msg``.

Lifecycle
---------
The process-wide :class:`LogFacade` is created lazily on first use from
``FORGEKIT_LOG_LEVEL`` / ``FORGEKIT_DEBUG`` / ``FORGEKIT_SHOW_TRACE``
(falling back to the manifest, then to ``error`` / off / off).  Creation
is guarded by a lock and happens at most once; the CLI may replace it
with :func:`install_facade` after parsing its flags.

Environment values are read through
:func:`forgekit.utils.settings.get_settings`; an invalid one raises
:class:`~forgekit.exceptions.ConfigError` when the facade is built.  Once
built, the facade never raises outward: a logging problem must not abort
a command.
"""

from __future__ import annotations

import inspect
import logging
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from forgekit.utils.levels import LogLevel
from forgekit.utils.settings import ForgeKitSettings, get_settings

if TYPE_CHECKING:
    from forgekit.core.models import Manifest

DEFAULT_LOG_LEVEL: LogLevel = LogLevel.ERROR

SUPPRESSED_MESSAGE: str = "Log: message not printed due to log level"
CONTEXT_ATTR: str = "forge_context"
"""Name of the attribute the context map is attached under on each record."""


# ---------------------------------------------------------------------------
# Owner capability and handles
# ---------------------------------------------------------------------------

@runtime_checkable
class HasLogger(Protocol):
    """Capability implemented by objects that own a logger.

    ``get_logger`` may return a :class:`LoggerHandle` or a plain
    :class:`logging.Logger`.
    """

    def get_logger(self) -> Any:
        ...  # pragma: no cover


@dataclass(slots=True)
class LoggerHandle:
    """A sink plus a snapshot of the filter configuration it logs with."""

    sink: logging.Logger
    level: LogLevel = DEFAULT_LOG_LEVEL
    show_trace: bool = False
    debug: bool = False

    def get_logger(self) -> logging.Logger:
        return self.sink

    @property
    def show_data(self) -> bool:
        """Whether sinks should render the attached context map."""
        return self.debug or self.show_trace

    def will_print(self, severity: LogLevel) -> bool:
        return will_print(severity, self.level, debug=self.debug)


def will_print(severity: LogLevel, threshold: LogLevel, *, debug: bool = False) -> bool:
    """Return ``True`` when a *severity* record passes *threshold*."""
    if debug:
        return True
    if severity in (LogLevel.FATAL, LogLevel.PANIC):
        return True
    return severity >= threshold


# ---------------------------------------------------------------------------
# Sink construction
# ---------------------------------------------------------------------------

class ContextFormatter(logging.Formatter):
    """Append the record's context map when its ``showData`` flag is set."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context: Mapping[str, Any] | None = getattr(record, CONTEXT_ATTR, None)
        if not context or not context.get("showData"):
            return message
        details = " ".join(
            f"{key}={value}" for key, value in context.items() if key != "showData"
        )
        return f"{message} | {details}"


def _build_console_handler() -> logging.Handler:
    """Rich handler on stderr, or a plain stream handler without Rich."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            ContextFormatter("%(asctime)s %(levelname)-7s %(message)s"),
        )
        return handler

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(ContextFormatter("%(message)s"))
    return handler


def build_sink(name: str) -> logging.Logger:
    """Return the stdlib logger *name*, wired with one console handler.

    The logger itself accepts everything; the console handler's level is
    adjusted by :class:`LogFacade` to mirror the effective threshold.
    Calling this twice for the same name does not add a second handler.
    """
    sink = logging.getLogger(name)
    sink.setLevel(logging.DEBUG)
    sink.propagate = False
    if not any(_is_console_handler(h) for h in sink.handlers):
        handler = _build_console_handler()
        handler.forgekit_console = True  # type: ignore[attr-defined]
        sink.addHandler(handler)
    return sink


def _is_console_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, "forgekit_console", False))


# ---------------------------------------------------------------------------
# Caller introspection
# ---------------------------------------------------------------------------

def _caller_location(stacklevel: int) -> tuple[str, str, int]:
    """Return ``(function, file, line)`` of the frame *stacklevel* levels up."""
    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return "<unknown>", "<unknown>", 0
        module = frame.f_globals.get("__name__", "<unknown>")
        return f"{module}.{frame.f_code.co_name}", frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------

class LogFacade:
    """Level-filtered router in front of a :class:`logging.Logger` sink.

    Parameters
    ----------
    manifest:
        Supplies the application name, binary name and version stamped
        on every record.
    sink:
        Underlying logger.  Defaults to :func:`build_sink` on
        ``manifest.bin``.
    level, debug, show_trace:
        Initial filter configuration.
    """

    def __init__(
        self,
        manifest: Manifest,
        *,
        sink: logging.Logger | None = None,
        level: LogLevel = DEFAULT_LOG_LEVEL,
        debug: bool = False,
        show_trace: bool = False,
    ) -> None:
        self._manifest = manifest
        self._sink: logging.Logger = (
            sink if sink is not None else build_sink(manifest.bin or manifest.name)
        )
        self._level: LogLevel = level
        self._debug: bool = debug
        self._show_trace: bool = show_trace
        self._apply_level()

    @classmethod
    def from_environment(
        cls,
        manifest: Manifest | None = None,
        settings: ForgeKitSettings | None = None,
    ) -> LogFacade:
        """Build a facade from environment settings and manifest defaults.

        Raises
        ------
        ConfigError
            If a ``FORGEKIT_*`` variable holds an invalid value.
        """
        if settings is None:
            settings = get_settings()
        if manifest is None:
            from forgekit.infra.manifest_loader import get_manifest

            manifest = get_manifest()

        level_name = (
            settings.log_level or manifest.log_level or DEFAULT_LOG_LEVEL.name
        )
        return cls(
            manifest,
            level=LogLevel.parse(level_name),
            debug=_first_set(settings.debug, manifest.debug),
            show_trace=_first_set(settings.show_trace, manifest.show_trace),
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def effective_level(self) -> LogLevel:
        """The threshold actually applied: DEBUG while debug mode is on."""
        return LogLevel.DEBUG if self._debug else self._level

    @property
    def handle(self) -> LoggerHandle:
        """Handle on the process-wide sink with the current configuration."""
        return self._bind(self._sink)

    def get_log_level(self) -> LogLevel:
        return self._level

    def get_debug(self) -> bool:
        return self._debug

    def get_show_trace(self) -> bool:
        return self._show_trace

    def set_log_level(self, name: str | LogLevel) -> None:
        """Set the threshold; unrecognised names reset it to ERROR."""
        self._level = name if isinstance(name, LogLevel) else LogLevel.parse(name)
        self._apply_level()

    def set_debug(self, flag: bool) -> None:
        """Toggle debug mode; turning it off restores the configured level."""
        self._debug = flag
        self._apply_level()

    def set_show_trace(self, flag: bool) -> None:
        self._show_trace = flag

    def _apply_level(self) -> None:
        # FATAL and PANIC bypass the threshold, so the handler never
        # filters above FATAL.
        handler_level = min(
            self.effective_level.stdlib_level, LogLevel.FATAL.stdlib_level,
        )
        for handler in self._sink.handlers:
            if _is_console_handler(handler):
                handler.setLevel(handler_level)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def log(self, severity: str | LogLevel, *messages: object, stacklevel: int = 1) -> None:
        """Log *messages* (joined by spaces) at *severity*."""
        self._log_with(self.handle, severity, messages, stacklevel + 1)

    def obj_log(
        self,
        owner: object,
        severity: str | LogLevel,
        *messages: object,
        stacklevel: int = 1,
    ) -> None:
        """Log through the logger that *owner* carries."""
        self._log_with(self.resolve(owner), severity, messages, stacklevel + 1)

    def resolve(self, owner: object) -> LoggerHandle:
        """Return a handle bound to *owner*'s logger.

        Resolution order: ``owner.get_logger()``, then ``owner.logger``
        (``None`` means the process-wide sink).  Owners offering neither,
        or whose logger cannot be read, get the process-wide handle and an
        ERROR record naming their type.
        """
        try:
            if isinstance(owner, HasLogger):
                candidate = owner.get_logger()
            elif hasattr(owner, "logger"):
                candidate = owner.logger  # type: ignore[attr-defined]
            else:
                self._report_unresolved(owner, "object does not have a logger field")
                return self.handle
        except Exception as exc:  # noqa: BLE001
            self._report_unresolved(owner, f"reading the logger failed: {exc}")
            return self.handle

        if candidate is None:
            return self.handle
        if isinstance(candidate, LoggerHandle):
            return self._bind(candidate.sink)
        if isinstance(candidate, logging.Logger):
            return self._bind(candidate)

        self._report_unresolved(owner, f"logger is a {type(candidate).__name__}")
        return self.handle

    def _bind(self, sink: logging.Logger) -> LoggerHandle:
        return LoggerHandle(
            sink=sink,
            level=self._level,
            show_trace=self._show_trace,
            debug=self._debug,
        )

    def _report_unresolved(self, owner: object, reason: str) -> None:
        owner_type = type(owner).__name__
        context = {
            "context": "Log",
            "logType": "error",
            "object": owner_type,
            "msg": reason,
            "showData": self._debug or self._show_trace,
        }
        self._sink.log(
            LogLevel.ERROR.stdlib_level,
            f"log object ({owner_type}) does not have a logger field",
            extra={CONTEXT_ATTR: context},
        )

    def _log_with(
        self,
        handle: LoggerHandle,
        severity: str | LogLevel,
        messages: tuple[object, ...],
        stacklevel: int,
    ) -> None:
        level = _coerce_severity(severity)
        function, filename, line = _caller_location(stacklevel + 1)
        message = " ".join(str(part) for part in messages)
        context = self._build_context(level, function, filename, line, handle.show_data)

        if handle.will_print(level):
            handle.sink.log(level.stdlib_level, message, extra={CONTEXT_ATTR: context})
            return

        context["msg"] = message
        context["showData"] = False
        handle.sink.log(
            LogLevel.DEBUG.stdlib_level,
            SUPPRESSED_MESSAGE,
            extra={CONTEXT_ATTR: context},
        )

    def _build_context(
        self,
        level: LogLevel,
        function: str,
        filename: str,
        line: int,
        show_data: bool,
    ) -> dict[str, Any]:
        return {
            "context": function,
            "file": filename,
            "line": line,
            "logType": level.name.lower(),
            "timestamp": datetime.now().astimezone().isoformat(timespec="seconds"),
            "appName": self._manifest.name,
            "bin": self._manifest.bin,
            "version": self._manifest.version,
            "showData": show_data,
        }


def _first_set(override: bool | None, fallback: bool) -> bool:
    return fallback if override is None else override


def _coerce_severity(severity: str | LogLevel) -> LogLevel:
    if isinstance(severity, LogLevel):
        return severity
    if not severity:
        return LogLevel.INFO
    return LogLevel.parse(severity)


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_facade: LogFacade | None = None
_facade_lock = threading.Lock()


def get_facade() -> LogFacade:
    """Return the process-wide facade, creating it on first use."""
    global _facade
    if _facade is None:
        with _facade_lock:
            if _facade is None:
                _facade = LogFacade.from_environment()
    return _facade


def install_facade(facade: LogFacade) -> None:
    """Replace the process-wide facade (used by the CLI after flag parsing)."""
    global _facade
    with _facade_lock:
        _facade = facade


def reset_logger() -> None:
    """Forget the process-wide facade; the next call recreates it."""
    global _facade
    with _facade_lock:
        _facade = None


def get_logger(owner: object | None = None) -> LoggerHandle:
    """Return the process-wide handle, or one resolved for *owner*."""
    facade = get_facade()
    if owner is None:
        return facade.handle
    return facade.resolve(owner)


def new_logger(prefix: str) -> LoggerHandle:
    """Standalone handle on sink *prefix* with default configuration."""
    return LoggerHandle(sink=build_sink(prefix))


def log(severity: str | LogLevel, *messages: object) -> None:
    get_facade().log(severity, *messages, stacklevel=2)


def obj_log(owner: object, severity: str | LogLevel, *messages: object) -> None:
    get_facade().obj_log(owner, severity, *messages, stacklevel=2)


def set_debug(flag: bool) -> None:
    get_facade().set_debug(flag)


def set_log_level(name: str | LogLevel) -> None:
    get_facade().set_log_level(name)


def set_show_trace(flag: bool) -> None:
    get_facade().set_show_trace(flag)


def get_log_level() -> LogLevel:
    return get_facade().get_log_level()


def get_debug() -> bool:
    return get_facade().get_debug()


def get_show_trace() -> bool:
    return get_facade().get_show_trace()
