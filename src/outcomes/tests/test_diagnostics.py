"""Tests for diagnostic traces, settings and logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import get_args

import pytest

from outcomes import ErrorContext, ErrorTrace, Failure, catching, context, trace, trace_from_exc
from outcomes.config import LogLevel, clear_settings_cache, get_settings
from outcomes.log import _LEVELS, configure_logging, logger


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Reload settings from the (patched) environment for each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def restore_level() -> Iterator[None]:
    level = logger.level
    yield
    logger.setLevel(level)


# ═════════════════════════════════════════════════════════════════════════════
# ErrorTrace
# ═════════════════════════════════════════════════════════════════════════════


def test_trace_is_excluded_from_equality_and_hash() -> None:
    traced = Failure("e", trace("first"))
    other = Failure("e", trace("second"))

    assert traced == other == Failure("e")
    assert hash(traced) == hash(Failure("e"))
    assert repr(traced) == "Failure('e')"


def test_with_context_builds_trace() -> None:
    failure = Failure("boom").with_context("load", "config.py", key="db")

    assert failure == Failure("boom")
    assert failure.trace is not None
    assert failure.trace.message == "boom"
    assert failure.trace.contexts == (ErrorContext("load", "config.py", {"key": "db"}),)


def test_with_context_stacks() -> None:
    failure = Failure("boom").with_context("inner").with_context("outer")

    assert failure.trace is not None
    assert [c.operation for c in failure.trace.contexts] == ["inner", "outer"]


def test_context_metadata_is_not_shared() -> None:
    """Each frame owns its metadata, even when none was given."""
    first = Failure("a").with_context("load")
    second = Failure("b").with_context("save")
    assert first.trace is not None and second.trace is not None

    first.trace.contexts[0].metadata["leak"] = 1

    assert second.trace.contexts[0].metadata == {}
    assert context("fresh").metadata == {}


def test_map_err_and_passthrough_keep_trace() -> None:
    failure = Failure("boom", trace("diagnostic"))

    assert failure.map(lambda x: x) is failure
    assert failure.flat_map(lambda x: x) is failure

    mapped = failure.map_err(str.upper)
    assert isinstance(mapped, Failure)
    assert mapped.err == "BOOM"
    assert mapped.trace is failure.trace


def test_format() -> None:
    t = trace("failed", details="tb").with_context(context("fetch", "api.py", attempt=2))

    assert str(t) == "failed\nContext trace:\n  - fetch at api.py (attempt=2)"
    assert t.format(include_details=True).endswith("\nDetails:\ntb")
    assert ErrorTrace("plain").format() == "plain"


def test_trace_from_exc_captures_traceback() -> None:
    try:
        raise ValueError("bad value")
    except ValueError as exc:
        t = trace_from_exc(exc, operation="parse")

    assert t.message == "bad value"
    assert t.details is not None and "ValueError: bad value" in t.details
    assert t.contexts[0].operation == "parse"


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_default_settings() -> None:
    settings = get_settings()

    assert settings.trace.capture_traceback is True
    assert settings.trace.max_contexts == 32
    assert settings.logging.level == "WARNING"


def test_capture_traceback_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTCOMES_TRACE_CAPTURE_TRACEBACK", "false")

    failure = catching(int, "x")

    assert isinstance(failure, Failure)
    assert failure.trace is not None
    assert failure.trace.details is None


def test_max_contexts_drops_oldest(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTCOMES_TRACE_MAX_CONTEXTS", "2")

    failure = Failure("e").with_context("a").with_context("b").with_context("c")

    assert failure.trace is not None
    assert [c.operation for c in failure.trace.contexts] == ["b", "c"]


def test_invalid_settings_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    from pydantic import ValidationError

    monkeypatch.setenv("OUTCOMES_TRACE_MAX_CONTEXTS", "0")
    with pytest.raises(ValidationError):
        get_settings()


# ═════════════════════════════════════════════════════════════════════════════
# Logging
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("restore_level")
def test_configure_logging_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTCOMES_LOG_LEVEL", "debug")

    assert configure_logging() == logging.DEBUG
    assert logger.level == logging.DEBUG


@pytest.mark.usefixtures("restore_level")
def test_configure_logging_explicit_level() -> None:
    assert configure_logging("error") == logging.ERROR


@pytest.mark.usefixtures("restore_level")
@pytest.mark.parametrize("level", get_args(LogLevel))
def test_configure_logging_accepts_every_settings_level(level: str) -> None:
    """Every level the settings model allows is accepted, and nothing else."""
    assert configure_logging(level) == logging.getLevelName(level)
    assert _LEVELS == get_args(LogLevel)


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown level"):
        configure_logging("LOUD")


def test_catching_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="outcomes"):
        catching(int, "x", operation="parse-port")

    assert any("captured ValueError in parse-port" in r.getMessage() for r in caplog.records)
