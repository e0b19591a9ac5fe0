"""
Log providers (backend adapters).

One provider per backend. A provider is a factory for Loggers bound to a
name in its backend, plus a side-effect-free availability probe the
resolver uses to pick a backend at process start.

Third-party backends are optional: their modules are located with
importlib.util.find_spec() during probing and only imported once the
provider is actually constructed.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Optional

from logbridge.logger import Logger, MessageFactory
from logbridge.records import LogLevel, LogRecord


class ProviderUnavailableError(RuntimeError):
    """Raised when constructing a provider whose backend is not installed."""


class LogProvider(ABC):
    """
    Base provider.

    ``available_override`` is a per-class switch: set it to False to make
    the probe fail regardless of the environment (keeps a backend out of
    discovery without uninstalling it).
    """

    name: str = ""
    available_override: bool = True

    def __init__(self) -> None:
        if not self._is_installed():
            raise ProviderUnavailableError(
                f"Log provider '{self.name}' is not available: backend not installed"
            )

    @classmethod
    def is_available(cls) -> bool:
        """Probe: may this provider be selected in the current process?"""
        return cls.available_override and cls._is_installed() and cls._is_configured()

    @classmethod
    def _is_installed(cls) -> bool:
        """Whether the backend's runtime support can be loaded."""
        return True

    @classmethod
    def _is_configured(cls) -> bool:
        """Whether the application has set the backend up. Override if observable."""
        return True

    @abstractmethod
    def get_logger(self, name: str) -> Logger:
        """Return a Logger bound to ``name`` in the backend."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ═══════════════════════════════════════════════════════════════════
#  stdlib logging
# ═══════════════════════════════════════════════════════════════════

class StdlibLogProvider(LogProvider):
    """
    Python's ``logging`` module.

    Always installed, so the probe instead checks that the application
    configured it: the root logger must have at least one handler.
    """

    name = "stdlib"

    @classmethod
    def _is_configured(cls) -> bool:
        return logging.getLogger().hasHandlers()

    def get_logger(self, name: str) -> Logger:
        return StdlibLogger(logging.getLogger(name))


class StdlibLogger(Logger):
    """LogLevel values are stdlib-compatible, so levels pass straight through."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        stdlib_level = int(level)
        if not self._logger.isEnabledFor(stdlib_level):
            return False
        if message_factory is None:
            return True
        self._logger.log(
            stdlib_level, message_factory(), stacklevel=_caller_stacklevel()
        )
        return True

    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        stdlib_level = int(level)
        if self._logger.isEnabledFor(stdlib_level):
            self._logger.log(
                stdlib_level,
                message_factory(),
                exc_info=error,
                stacklevel=_caller_stacklevel(),
            )

    def __repr__(self) -> str:
        return f"StdlibLogger({self.name!r})"


def _caller_stacklevel() -> int:
    """
    ``stacklevel`` that attributes a record to the first frame outside
    this package, so %(filename)s and %(funcName)s name the call site
    whichever facade or wrapper path the message took.

    Must be called directly from the method that calls Logger.log().
    """
    # 0 is this helper, 1 the StdlibLogger method, 2 its caller
    frame = sys._getframe(2)
    stacklevel = 2
    while frame is not None and _is_package_frame(frame):
        frame = frame.f_back
        stacklevel += 1
    return stacklevel


def _is_package_frame(frame: Any) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == "logbridge" or module.startswith("logbridge.")


# ═══════════════════════════════════════════════════════════════════
#  structlog
# ═══════════════════════════════════════════════════════════════════

class StructlogLogProvider(LogProvider):
    """structlog, if installed. Configuration is left to the application."""

    name = "structlog"
    module_name = "structlog"

    def __init__(self) -> None:
        super().__init__()
        self._structlog = importlib.import_module(self.module_name)

    @classmethod
    def _is_installed(cls) -> bool:
        return importlib.util.find_spec(cls.module_name) is not None

    def get_logger(self, name: str) -> Logger:
        # Positional name reaches the logger factory; ``logger`` is bound per call
        return StructlogLogger(self._structlog.get_logger(name), name)


# structlog has no TRACE; write it as DEBUG
_STRUCTLOG_METHODS: dict[LogLevel, tuple[str, int]] = {
    LogLevel.TRACE: ("debug", logging.DEBUG),
    LogLevel.DEBUG: ("debug", logging.DEBUG),
    LogLevel.INFO: ("info", logging.INFO),
    LogLevel.WARN: ("warning", logging.WARNING),
    LogLevel.ERROR: ("error", logging.ERROR),
    LogLevel.FATAL: ("critical", logging.CRITICAL),
}


class StructlogLogger(Logger):
    """
    Wraps a structlog lazy proxy.

    The proxy is bound on every call so configuration done after the
    logger was created still applies.
    """

    def __init__(self, logger: Any, name: str) -> None:
        self._logger = logger
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        method, numeric = _STRUCTLOG_METHODS[LogLevel(level)]
        bound = self._logger.bind(logger=self._name)
        if not _structlog_enabled(bound, numeric):
            return False
        if message_factory is None:
            return True
        getattr(bound, method)(message_factory())
        return True

    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        method, numeric = _STRUCTLOG_METHODS[LogLevel(level)]
        bound = self._logger.bind(logger=self._name)
        if _structlog_enabled(bound, numeric):
            getattr(bound, method)(message_factory(), exc_info=error)

    def __repr__(self) -> str:
        return f"StructlogLogger({self._name!r})"


def _structlog_enabled(bound: Any, level: int) -> bool:
    """Filtering bound loggers and stdlib bound loggers both expose a level check."""
    check = getattr(bound, "is_enabled_for", None)
    if check is None:
        check = getattr(bound, "isEnabledFor", None)
    if check is not None:
        return bool(check(level))
    effective = getattr(bound, "get_effective_level", None)
    if effective is not None:
        return level >= effective()
    return True


# ═══════════════════════════════════════════════════════════════════
#  In-memory capture
# ═══════════════════════════════════════════════════════════════════

class MemoryLogProvider(LogProvider):
    """
    Bounded in-memory sink. Never auto-discovered; install it explicitly
    with set_provider() or through configuration.

    All loggers created by one provider share its ring buffer.
    """

    name = "memory"

    def __init__(self, min_level: int | str = LogLevel.TRACE, capacity: int = 10000) -> None:
        super().__init__()
        self.min_level = LogLevel.from_value(min_level)
        self._buffer: deque[LogRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def get_logger(self, name: str) -> Logger:
        return MemoryLogger(self, name)

    def is_enabled(self, level: LogLevel) -> bool:
        return level >= self.min_level

    def append(self, record: LogRecord) -> None:
        with self._lock:
            self._buffer.append(record)

    def get_records(
        self,
        n: Optional[int] = None,
        level: int | str | None = None,
        logger_name: Optional[str] = None,
    ) -> list[LogRecord]:
        """Captured records, oldest first, optionally filtered by minimum level and name."""
        with self._lock:
            records = list(self._buffer)

        if level is not None:
            threshold = LogLevel.from_value(level)
            records = [r for r in records if r.level >= threshold]
        if logger_name is not None:
            records = [r for r in records if r.logger_name == logger_name]

        return records if n is None else records[-n:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    @property
    def capacity(self) -> int | None:
        return self._buffer.maxlen

    def __repr__(self) -> str:
        return f"MemoryLogProvider(min_level={self.min_level.name}, capacity={self.capacity})"


class MemoryLogger(Logger):

    def __init__(self, provider: MemoryLogProvider, name: str) -> None:
        self._provider = provider
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        if not self._provider.is_enabled(level):
            return False
        if message_factory is None:
            return True
        self._provider.append(LogRecord.create(level, self._name, message_factory()))
        return True

    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        if self._provider.is_enabled(level):
            self._provider.append(
                LogRecord.create(level, self._name, message_factory(), error)
            )

    def __repr__(self) -> str:
        return f"MemoryLogger({self._name!r})"


# ── Registry ──────────────────────────────────────────────────────

# Discovery order. First available wins.
DEFAULT_CANDIDATES: tuple[type[LogProvider], ...] = (
    StdlibLogProvider,
    StructlogLogProvider,
)

PROVIDERS: dict[str, type[LogProvider]] = {
    StdlibLogProvider.name: StdlibLogProvider,
    StructlogLogProvider.name: StructlogLogProvider,
    MemoryLogProvider.name: MemoryLogProvider,
}


def provider_class(name: str) -> type[LogProvider]:
    """Look up a built-in provider class by name."""
    try:
        return PROVIDERS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log provider '{name}'. "
            f"Available: {', '.join(sorted(PROVIDERS))}"
        ) from None
