"""
Tests for the facade helpers.

Covers:
- Enablement queries per level
- Lazy messages: factory called once when enabled, never when disabled
- Formatted messages
- *_exception helpers always forward to the logger
- None logger rejected
- Failing factories through the facade
"""

import pytest

from logbridge import facade
from logbridge.logger import NoOpLogger
from logbridge.providers import MemoryLogProvider
from logbridge.records import LogLevel
from logbridge.resolver import LogProviderResolver
from logbridge.wrapper import FAILED_TO_GENERATE_LOG_MESSAGE


LEVEL_HELPERS = {
    LogLevel.TRACE: ("is_trace_enabled", "trace", "trace_format", "trace_exception"),
    LogLevel.DEBUG: ("is_debug_enabled", "debug", "debug_format", "debug_exception"),
    LogLevel.INFO: ("is_info_enabled", "info", "info_format", "info_exception"),
    LogLevel.WARN: ("is_warn_enabled", "warn", "warn_format", "warn_exception"),
    LogLevel.ERROR: ("is_error_enabled", "error", "error_format", "error_exception"),
    LogLevel.FATAL: ("is_fatal_enabled", "fatal", "fatal_format", "fatal_exception"),
}


class Recorder:
    """Logger stand-in that records raw calls."""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.writes = []
        self.errors = []

    def write(self, level, message_factory=None):
        self.writes.append((level, message_factory))
        if self.enabled and message_factory is not None:
            message_factory()
        return self.enabled

    def write_error(self, level, message_factory, error):
        self.errors.append((level, message_factory(), error))


class CountingFactory:

    def __init__(self, message="lazy"):
        self.message = message
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.message


def wrapped_memory(min_level=LogLevel.TRACE):
    provider = MemoryLogProvider(min_level=min_level)
    resolver = LogProviderResolver([])
    resolver.set_provider(provider)
    return provider, resolver.get_logger("app.facade")


# ═══════════════════════════════════════════════════════════════════
#  No-op logger
# ═══════════════════════════════════════════════════════════════════

class TestNoOp:
    @pytest.mark.parametrize("level", list(LogLevel))
    def test_nothing_enabled(self, level):
        is_enabled = getattr(facade, LEVEL_HELPERS[level][0])
        assert is_enabled(NoOpLogger()) is False

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_factories_never_called(self, level):
        _, plain, formatted, with_error = LEVEL_HELPERS[level]
        log = NoOpLogger()
        factory = CountingFactory()

        getattr(facade, plain)(log, factory)
        getattr(facade, plain)(log, "text")
        getattr(facade, formatted)(log, "{0}", 1)
        getattr(facade, with_error)(log, factory, RuntimeError("x"))

        assert factory.calls == 0

    def test_resolver_without_backend(self):
        log = LogProviderResolver([]).get_logger("app")
        assert facade.is_fatal_enabled(log) is False
        facade.fatal(log, "dropped")


# ═══════════════════════════════════════════════════════════════════
#  Enablement and lazy messages
# ═══════════════════════════════════════════════════════════════════

class TestLevels:
    @pytest.mark.parametrize("level", list(LogLevel))
    def test_enablement_matches_threshold(self, level):
        _, log = wrapped_memory(min_level=LogLevel.WARN)
        is_enabled = getattr(facade, LEVEL_HELPERS[level][0])
        assert is_enabled(log) is (level >= LogLevel.WARN)

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_plain_message_written_at_level(self, level):
        provider, log = wrapped_memory()
        getattr(facade, LEVEL_HELPERS[level][1])(log, "hello")
        records = provider.get_records()
        assert len(records) == 1
        assert records[0].level is level
        assert records[0].message == "hello"
        assert records[0].logger_name == "app.facade"

    def test_enabled_factory_called_once(self):
        provider, log = wrapped_memory()
        factory = CountingFactory("computed")
        facade.debug(log, factory)
        assert factory.calls == 1
        assert provider.get_records()[0].message == "computed"

    def test_disabled_factory_never_called(self):
        provider, log = wrapped_memory(min_level=LogLevel.INFO)
        factory = CountingFactory()
        facade.debug(log, factory)
        facade.trace(log, factory)
        assert factory.calls == 0
        assert provider.count == 0

    def test_disabled_string_not_written(self):
        recorder = Recorder(enabled=False)
        facade.info(recorder, "skipped")
        # Only the enablement query reaches the logger
        assert recorder.writes == [(LogLevel.INFO, None)]

    def test_generic_log(self):
        provider, log = wrapped_memory()
        facade.log(log, LogLevel.WARN, "generic")
        assert facade.is_enabled(log, LogLevel.TRACE) is True
        assert provider.get_records()[0].level is LogLevel.WARN

    def test_none_message_factory_result(self):
        provider, log = wrapped_memory()
        facade.info(log, lambda: None)
        assert provider.get_records()[0].message is None


# ═══════════════════════════════════════════════════════════════════
#  Formatting
# ═══════════════════════════════════════════════════════════════════

class TestFormat:
    def test_positional_placeholders(self):
        provider, log = wrapped_memory()
        facade.info_format(log, "Value={0}", 42)
        assert provider.get_records()[0].message == "Value=42"

    def test_multiple_arguments(self):
        provider, log = wrapped_memory()
        facade.warn_format(log, "{0} of {1} rows failed ({2:.1f}%)", 3, 40, 7.5)
        assert provider.get_records()[0].message == "3 of 40 rows failed (7.5%)"

    def test_no_arguments(self):
        provider, log = wrapped_memory()
        facade.error_format(log, "literal")
        assert provider.get_records()[0].message == "literal"

    def test_disabled_level_does_not_format(self):
        class Exploding:
            def __format__(self, spec):
                raise AssertionError("formatted while disabled")

        provider, log = wrapped_memory(min_level=LogLevel.ERROR)
        facade.debug_format(log, "{0}", Exploding())
        assert provider.count == 0

    def test_bad_template_contained(self):
        provider, log = wrapped_memory()
        facade.info_format(log, "Value={1}", 42)

        fallback = provider.get_records(level=LogLevel.ERROR)
        assert len(fallback) == 1
        assert fallback[0].message == FAILED_TO_GENERATE_LOG_MESSAGE
        assert isinstance(fallback[0].error, IndexError)
        info = [r for r in provider.get_records() if r.level is LogLevel.INFO]
        assert [r.message for r in info] == [None]

    def test_failing_argument_contained(self):
        class Unprintable:
            def __format__(self, spec):
                raise RuntimeError("boom")

        provider, log = wrapped_memory()
        facade.warn_format(log, "Value={0}", Unprintable())

        fallback = provider.get_records(level=LogLevel.ERROR)
        assert len(fallback) == 1
        assert fallback[0].message == FAILED_TO_GENERATE_LOG_MESSAGE
        assert str(fallback[0].error) == "boom"

    def test_enabled_level_formats_once(self):
        calls = []

        class Counted:
            def __format__(self, spec):
                calls.append(spec)
                return "x"

        recorder = Recorder(enabled=True)
        facade.info_format(recorder, "{0}", Counted())
        assert calls == [""]


# ═══════════════════════════════════════════════════════════════════
#  Error-attached helpers
# ═══════════════════════════════════════════════════════════════════

class TestExceptionHelpers:
    @pytest.mark.parametrize("level", list(LogLevel))
    def test_error_attached(self, level):
        provider, log = wrapped_memory()
        err = ValueError("bad")
        getattr(facade, LEVEL_HELPERS[level][3])(log, "failed", err)
        record = provider.get_records()[0]
        assert record.level is level
        assert record.message == "failed"
        assert record.error is err

    def test_forwarded_without_precheck(self):
        recorder = Recorder(enabled=False)
        err = RuntimeError("lost?")
        facade.debug_exception(recorder, "context", err)
        assert recorder.writes == []
        assert recorder.errors == [(LogLevel.DEBUG, "context", err)]

    def test_backend_still_filters(self):
        provider, log = wrapped_memory(min_level=LogLevel.ERROR)
        facade.info_exception(log, "below threshold", RuntimeError())
        assert provider.count == 0

    def test_lazy_message(self):
        provider, log = wrapped_memory()
        facade.log_exception(log, LogLevel.ERROR, lambda: "lazy context", KeyError("k"))
        assert provider.get_records()[0].message == "lazy context"


# ═══════════════════════════════════════════════════════════════════
#  Argument checks and failure containment
# ═══════════════════════════════════════════════════════════════════

class TestGuards:
    @pytest.mark.parametrize(
        "call",
        [
            lambda: facade.is_info_enabled(None),
            lambda: facade.info(None, "x"),
            lambda: facade.info_format(None, "{0}", 1),
            lambda: facade.info_exception(None, "x", RuntimeError()),
            lambda: facade.log(None, LogLevel.INFO, "x"),
        ],
    )
    def test_none_logger_rejected(self, call):
        with pytest.raises(ValueError, match="logger must not be None"):
            call()

    def test_failing_factory_reported(self):
        provider, log = wrapped_memory()

        def broken():
            raise ZeroDivisionError("division by zero")

        facade.info(log, broken)

        fallback = provider.get_records(level=LogLevel.ERROR)
        assert len(fallback) == 1
        assert fallback[0].message == FAILED_TO_GENERATE_LOG_MESSAGE
        assert isinstance(fallback[0].error, ZeroDivisionError)

    def test_failing_factory_in_exception_helper(self):
        provider, log = wrapped_memory()
        original = OSError("disk")

        def broken():
            raise KeyError("missing")

        facade.warn_exception(log, broken, original)

        records = provider.get_records()
        assert [r.message for r in records if r.error is original] == [None]
        assert FAILED_TO_GENERATE_LOG_MESSAGE in [r.message for r in records]
