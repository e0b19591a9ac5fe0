"""
logbridge: a pluggable logging facade.

Libraries log through one small Logger contract; the backend (stdlib
logging, structlog, or nothing at all) is discovered at process start.
Disabled levels never build their messages, and a message that fails
to build is reported instead of raised.

    from logbridge import get_logger, facade

    log = get_logger(__name__)
    facade.debug(log, lambda: f"expensive {compute()}")
    facade.info_format(log, "Loaded {0} rows", n)
"""

from logbridge import facade
from logbridge.records import LogLevel, LogRecord, level_name
from logbridge.logger import Logger, MessageFactory, NoOpLogger
from logbridge.wrapper import FAILED_TO_GENERATE_LOG_MESSAGE, LoggerExecutionWrapper
from logbridge.providers import (
    DEFAULT_CANDIDATES,
    PROVIDERS,
    LogProvider,
    MemoryLogProvider,
    ProviderUnavailableError,
    StdlibLogProvider,
    StructlogLogProvider,
)
from logbridge.resolver import (
    LogProviderResolver,
    get_current_logger,
    get_logger,
    logger_for,
    set_provider,
)
from logbridge.config import LogBridgeConfig, configure

__all__ = [
    "facade",
    "LogLevel",
    "LogRecord",
    "level_name",
    "Logger",
    "MessageFactory",
    "NoOpLogger",
    "FAILED_TO_GENERATE_LOG_MESSAGE",
    "LoggerExecutionWrapper",
    "DEFAULT_CANDIDATES",
    "PROVIDERS",
    "LogProvider",
    "MemoryLogProvider",
    "ProviderUnavailableError",
    "StdlibLogProvider",
    "StructlogLogProvider",
    "LogProviderResolver",
    "get_current_logger",
    "get_logger",
    "logger_for",
    "set_provider",
    "LogBridgeConfig",
    "configure",
]
