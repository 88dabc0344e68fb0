"""Tests for structured logging."""

from __future__ import annotations

import io
from collections.abc import Iterator

import orjson
import pytest

from sigcase.core import validate
from sigcase.foundation.config import clear_settings_cache
from sigcase.observability import (
    ConsoleRenderer,
    JsonRenderer,
    NoOpRenderer,
    configure_logging,
    get_logger,
    log_context,
)


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[None]:
    clear_settings_cache()
    yield
    configure_logging("none", "info")
    clear_settings_cache()


def _lines(buf: io.StringIO) -> list[dict[str, object]]:
    return [orjson.loads(line) for line in buf.getvalue().splitlines()]


def test_json_output() -> None:
    buf = io.StringIO()
    assert isinstance(configure_logging("json", "info", output=buf), JsonRenderer)
    get_logger("sigcase.test", component="registry").info("signature cached", inputs=2)
    (entry,) = _lines(buf)
    assert entry["event"] == "signature cached"
    assert entry["level"] == "info"
    assert entry["logger"] == "sigcase.test"
    assert entry["component"] == "registry"
    assert entry["inputs"] == 2


def test_level_filtering() -> None:
    buf = io.StringIO()
    configure_logging("json", "warning", output=buf)
    log = get_logger("sigcase.test")
    log.info("hidden")
    log.warning("shown")
    assert [e["event"] for e in _lines(buf)] == ["shown"]


def test_module_loggers_follow_configuration() -> None:
    """Loggers created at import time pick up later configuration."""
    buf = io.StringIO()
    configure_logging("json", "debug", output=buf)
    validate(None, ())
    (entry,) = _lines(buf)
    assert entry["event"] == "validation failed"
    assert entry["code"] == "EMPTY_VALUE"
    assert entry["logger"] == "sigcase.validate"


def test_log_context_scoping() -> None:
    buf = io.StringIO()
    configure_logging("json", "info", output=buf)
    log = get_logger()
    with log_context(request_id="abc"):
        log.info("inside")
    log.info("outside")
    inside, outside = _lines(buf)
    assert inside["request_id"] == "abc"
    assert "request_id" not in outside


def test_bind_returns_new_logger() -> None:
    base = get_logger("x", a=1)
    bound = base.bind(b=2)
    assert bound.name == "x"
    assert bound.context == {"a": 1, "b": 2}
    assert base.context == {"a": 1}


def test_call_site_overrides_bound_context() -> None:
    buf = io.StringIO()
    configure_logging("json", "info", output=buf)
    with log_context(source="scope", step=1):
        get_logger("x", source="bound").info("event", step=2)
    (entry,) = _lines(buf)
    assert entry["source"] == "bound"
    assert entry["step"] == 2


def test_console_renderer() -> None:
    buf = io.StringIO()
    renderer = configure_logging("console", "info", output=buf, colors=False)
    assert isinstance(renderer, ConsoleRenderer)
    get_logger().info("hello", name="world")
    assert '[info] hello name="world"' in buf.getvalue()
    get_logger("sigcase.registry").info("signature cached")
    assert "[info] sigcase.registry: signature cached" in buf.getvalue()


def test_unknown_level() -> None:
    with pytest.raises(ValueError, match="level"):
        configure_logging("none", "loud")


def test_format_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGCASE_LOG_FORMAT", "none")
    clear_settings_cache()
    assert isinstance(configure_logging(), NoOpRenderer)


def test_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging("xml")
