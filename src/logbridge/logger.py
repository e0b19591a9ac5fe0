"""
The Logger capability contract.

Every backend sink implements two operations. Message text is always
supplied as a zero-argument callable so a disabled level never pays
for formatting: implementations must not call the factory unless the
level is enabled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from logbridge.records import LogLevel

MessageFactory = Callable[[], Optional[str]]


class Logger(ABC):
    """A handle bound to one backend sink and one logical name."""

    @abstractmethod
    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        """
        Write a message at ``level``.

        With ``message_factory=None`` this is a pure enablement query:
        returns whether ``level`` is enabled and produces no output.
        Otherwise the factory is called exactly once if the level is
        enabled and the result forwarded to the backend (returns True);
        if the level is disabled the factory is never called (returns False).
        """
        ...

    @abstractmethod
    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        """Same gating as write(), with ``error`` forwarded for traceback capture."""
        ...


class NoOpLogger(Logger):
    """Reports every level disabled and does nothing."""

    def write(self, level: LogLevel, message_factory: MessageFactory | None = None) -> bool:
        return False

    def write_error(
        self,
        level: LogLevel,
        message_factory: MessageFactory,
        error: BaseException,
    ) -> None:
        pass

    def __repr__(self) -> str:
        return "NoOpLogger()"
