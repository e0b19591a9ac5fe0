"""
Log levels and captured log records.

Levels use stdlib-compatible numeric values so they map onto Python
``logging`` without translation. Declaration order is severity order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """The six facade levels, stdlib-compatible numeric values."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.strip().upper()
        name_upper = _ALIASES.get(name_upper, name_upper)
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            ) from None

    @classmethod
    def from_value(cls, value: int | str) -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


# Names other logging systems use for the same severities
_ALIASES: dict[str, str] = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}

LEVEL_NAMES: dict[int, str] = {member.value: member.name for member in LogLevel}


def level_name(level: int) -> str:
    """Get display name for a level value. Falls back to numeric string."""
    return LEVEL_NAMES.get(level, str(level))


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable record captured by the in-memory provider.

    ``message`` may be None when the message factory failed and the
    execution wrapper substituted an empty result.
    """
    timestamp: datetime
    level: LogLevel
    logger_name: str
    message: Optional[str]
    error: Optional[BaseException] = None

    @property
    def level_name(self) -> str:
        return self.level.name

    @classmethod
    def create(
        cls,
        level: LogLevel,
        logger_name: str,
        message: Optional[str],
        error: Optional[BaseException] = None,
    ) -> "LogRecord":
        """Factory method with auto-timestamp."""
        return cls(
            timestamp=datetime.now(timezone.utc),
            level=LogLevel(level),
            logger_name=logger_name,
            message=message,
            error=error,
        )
