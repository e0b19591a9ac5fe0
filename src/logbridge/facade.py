"""
Convenience functions for call sites.

Each level has four helpers built on Logger.write / Logger.write_error:

    is_debug_enabled(log)                    enablement query
    debug(log, "text") / debug(log, fn)      plain or lazy message
    debug_format(log, "Value={0}", 42)       formatted only when enabled
    debug_exception(log, "text", exc)        always forwarded with the error

Formatting uses str.format with positional placeholders, which does not
consult the locale, and runs only once the level is known to be enabled. ``*_exception`` helpers never pre-check the level: the
backend decides, so error context is not dropped on the facade side.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from logbridge.logger import Logger, MessageFactory
from logbridge.records import LogLevel

Message = Union[str, Callable[[], Optional[str]]]


def _guard_against_null_logger(logger: Logger | None) -> None:
    if logger is None:
        raise ValueError("logger must not be None")


def _constant(message: Optional[str]) -> MessageFactory:
    return lambda: message


# ── Generic ───────────────────────────────────────────────────────

def is_enabled(logger: Logger, level: LogLevel) -> bool:
    _guard_against_null_logger(logger)
    return logger.write(level, None)


def log(logger: Logger, level: LogLevel, message: Message) -> None:
    """
    Write ``message`` at ``level``.

    A callable is handed to the logger as-is and only called if the
    level is enabled. A string is written only after checking the level.
    """
    _guard_against_null_logger(logger)
    if callable(message):
        logger.write(level, message)
    elif logger.write(level, None):
        logger.write(level, _constant(message))


def log_format(logger: Logger, level: LogLevel, template: str, *args: Any) -> None:
    """
    Interpolate positional ``args`` into ``template`` if the level is enabled.

    Formatting happens inside the message factory, so a bad template or a
    failing argument is contained by the logger like any other factory error.
    """
    _guard_against_null_logger(logger)
    if logger.write(level, None):
        logger.write(level, lambda: template.format(*args))


def log_exception(logger: Logger, level: LogLevel, message: Message, error: BaseException) -> None:
    """Write ``message`` with ``error`` attached. The level check is left to the logger."""
    _guard_against_null_logger(logger)
    factory = message if callable(message) else _constant(message)
    logger.write_error(level, factory, error)


# ── Trace ─────────────────────────────────────────────────────────

def is_trace_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.TRACE)


def trace(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.TRACE, message)


def trace_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.TRACE, template, *args)


def trace_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.TRACE, message, error)


# ── Debug ─────────────────────────────────────────────────────────

def is_debug_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.DEBUG)


def debug(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.DEBUG, message)


def debug_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.DEBUG, template, *args)


def debug_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.DEBUG, message, error)


# ── Info ──────────────────────────────────────────────────────────

def is_info_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.INFO)


def info(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.INFO, message)


def info_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.INFO, template, *args)


def info_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.INFO, message, error)


# ── Warn ──────────────────────────────────────────────────────────

def is_warn_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.WARN)


def warn(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.WARN, message)


def warn_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.WARN, template, *args)


def warn_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.WARN, message, error)


# ── Error ─────────────────────────────────────────────────────────

def is_error_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.ERROR)


def error(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.ERROR, message)


def error_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.ERROR, template, *args)


def error_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.ERROR, message, error)


# ── Fatal ─────────────────────────────────────────────────────────

def is_fatal_enabled(logger: Logger) -> bool:
    return is_enabled(logger, LogLevel.FATAL)


def fatal(logger: Logger, message: Message) -> None:
    log(logger, LogLevel.FATAL, message)


def fatal_format(logger: Logger, template: str, *args: Any) -> None:
    log_format(logger, LogLevel.FATAL, template, *args)


def fatal_exception(logger: Logger, message: Message, error: BaseException) -> None:
    log_exception(logger, LogLevel.FATAL, message, error)
