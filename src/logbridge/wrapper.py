"""
Exception-safe Logger decorator.

Logging must never crash the caller. Every Logger handed out by the
resolver is wrapped here, so a message factory that raises turns into
a single ERROR record instead of an exception at the call site.
"""

from __future__ import annotations

from logbridge.logger import Logger, MessageFactory
from logbridge.records import LogLevel

FAILED_TO_GENERATE_LOG_MESSAGE = "Failed to generate log message"


def _failed_message() -> str:
    return FAILED_TO_GENERATE_LOG_MESSAGE


class LoggerExecutionWrapper(Logger):
    """
    Decorates a Logger so message-factory failures are contained.

    The factory given to the wrapped logger is itself wrapped: if the
    original raises, the exception is swallowed, one ERROR record with
    FAILED_TO_GENERATE_LOG_MESSAGE and the exception attached is written
    through this wrapper, and None is returned to the backend for the
    original call. The fallback factory is a constant, so the recursion
    ends after one step.
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    @property
    def wrapped_logger(self) -> Logger:
        return self._logger

    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        # Enablement queries have nothing to protect
        if message_factory is None:
            return self._logger.write(level, None)
        return self._logger.write(level, self._guard(message_factory))

    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        self._logger.write_error(level, self._guard(message_factory), error)

    def _guard(self, message_factory: MessageFactory) -> MessageFactory:
        def guarded() -> str | None:
            try:
                return message_factory()
            except Exception as exc:
                self.write_error(LogLevel.ERROR, _failed_message, exc)
            return None

        return guarded

    def __repr__(self) -> str:
        return f"LoggerExecutionWrapper({self._logger!r})"
