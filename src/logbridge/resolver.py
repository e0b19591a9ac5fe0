"""
Provider resolution.

Binds the facade to exactly one backend with zero mandatory
configuration. Candidates are probed in a fixed priority order, the
first available one is instantiated and cached, and every Logger
requested afterwards goes through it.

Usage:
    log = get_logger(__name__)
    set_provider(MemoryLogProvider())     # bypass discovery
    set_provider(None)                    # forget it, discover again

The module-level helpers use the shared resolver. Code that wants an
isolated binding constructs its own LogProviderResolver and passes it
as ``resolver=``.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, Callable, Optional, Sequence

from logbridge.logger import Logger, NoOpLogger
from logbridge.providers import DEFAULT_CANDIDATES, LogProvider
from logbridge.wrapper import LoggerExecutionWrapper


def _report_to_stderr(exc: BaseException) -> None:
    print(
        f"logbridge: exception occurred resolving a log provider, "
        f"logging is disabled: {exc!r}",
        file=sys.stderr,
        flush=True,
    )


class LogProviderResolver:
    """
    Resolves and caches the log provider.

    A discovery pass runs at most once until the cache is invalidated
    with set_provider(None). Probe and construction failures anywhere in
    the pass are reported through ``on_error`` and treated as "no
    provider found"; they never reach the caller.
    """

    _instance: Optional["LogProviderResolver"] = None
    _lock = threading.Lock()

    def __init__(
        self,
        candidates: Sequence[type[LogProvider]] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        self._candidates: tuple[type[LogProvider], ...] = (
            tuple(candidates) if candidates is not None else DEFAULT_CANDIDATES
        )
        self._on_error = on_error or _report_to_stderr
        self._provider: LogProvider | None = None
        self._source: str | None = None  # "explicit" | "discovered"
        self._probed = False
        self._resolve_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "LogProviderResolver":
        """Get or create the shared resolver."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared resolver. For testing only."""
        with cls._lock:
            cls._instance = None

    # ── Provider selection ────────────────────────────────────────

    @property
    def candidates(self) -> tuple[type[LogProvider], ...]:
        return self._candidates

    @property
    def current_provider(self) -> LogProvider | None:
        """The cached provider, without triggering discovery."""
        return self._provider

    def set_provider(self, provider: LogProvider | None) -> None:
        """
        Install ``provider`` directly, bypassing probing.

        None clears the cache; the next lookup runs discovery again.
        Loggers handed out earlier keep their original binding.
        """
        with self._resolve_lock:
            self._provider = provider
            self._source = "explicit" if provider is not None else None
            self._probed = provider is not None

    def resolve(self) -> LogProvider | None:
        """Return the cached provider, running discovery on first use."""
        provider = self._provider
        if provider is not None or self._probed:
            return provider

        with self._resolve_lock:
            if not self._probed:
                discovered = self._discover()
                if discovered is not None:
                    self._provider = discovered
                    self._source = "discovered"
                self._probed = True
            return self._provider

    def _discover(self) -> LogProvider | None:
        """First-match-stops probe over the candidates."""
        try:
            for candidate in self._candidates:
                if candidate.is_available():
                    return candidate()
        except Exception as exc:
            try:
                self._on_error(exc)
            except Exception:
                pass
        return None

    # ── Logger retrieval ──────────────────────────────────────────

    def get_logger(self, name_or_type: str | type) -> Logger:
        """Wrapped logger from the resolved provider, else a no-op logger."""
        name = logger_name(name_or_type)
        provider = self.resolve()
        if provider is None:
            return NoOpLogger()
        return LoggerExecutionWrapper(provider.get_logger(name))

    # ── Status ────────────────────────────────────────────────────

    def status(self) -> dict[str, Any]:
        """
        Describe resolver state.

        Returns:
            {
                "provider": str | None,
                "source": "explicit" | "discovered" | None,
                "candidates": [{"name": ..., "available": bool}],
            }
        """
        candidates = []
        for candidate in self._candidates:
            try:
                available = candidate.is_available()
            except Exception:
                available = False
            candidates.append({"name": candidate.name or candidate.__name__, "available": available})

        provider = self._provider
        return {
            "provider": (provider.name or type(provider).__name__) if provider is not None else None,
            "source": self._source,
            "candidates": candidates,
        }


# ── Naming ────────────────────────────────────────────────────────

def logger_name(name_or_type: str | type) -> str:
    """A str is used as-is; a class becomes ``module.QualName``."""
    if isinstance(name_or_type, str):
        if not name_or_type:
            raise ValueError("Logger name must not be empty")
        return name_or_type
    if isinstance(name_or_type, type):
        return f"{name_or_type.__module__}.{name_or_type.__qualname__}"
    if name_or_type is None:
        raise ValueError("Logger name must not be None")
    raise TypeError(
        f"Expected logger name or class, got {type(name_or_type).__name__}"
    )


# ── Shared-resolver helpers ───────────────────────────────────────

def _resolver(resolver: LogProviderResolver | None) -> LogProviderResolver:
    return resolver or LogProviderResolver.instance()


def get_logger(
    name_or_type: str | type,
    resolver: LogProviderResolver | None = None,
) -> Logger:
    """Get a logger by name or for a class."""
    return _resolver(resolver).get_logger(name_or_type)


def logger_for(obj: Any, resolver: LogProviderResolver | None = None) -> Logger:
    """Logger named after a class, or after an instance's class."""
    cls = obj if isinstance(obj, type) else type(obj)
    return _resolver(resolver).get_logger(cls)


def get_current_logger(resolver: LogProviderResolver | None = None) -> Logger:
    """Logger named after the calling module."""
    frame = sys._getframe(1)
    name = frame.f_globals.get("__name__") or "__main__"
    return _resolver(resolver).get_logger(name)


def set_provider(
    provider: LogProvider | None,
    resolver: LogProviderResolver | None = None,
) -> None:
    """Install a provider on the shared resolver (None re-enables discovery)."""
    _resolver(resolver).set_provider(provider)
