"""Tests for core/exceptions.py."""
from __future__ import annotations

from sdk_telemetry.core.exceptions import (
    ClockSkewError,
    ConfigurationError,
    TelemetryError,
)


def test_base_error_defaults() -> None:
    err = TelemetryError("something broke")
    assert str(err) == "something broke"
    assert err.code is None
    assert err.details == {}


def test_base_error_carries_code_and_details() -> None:
    err = TelemetryError("bad", code="E1", details={"url": "https://x"})
    assert err.code == "E1"
    assert err.details == {"url": "https://x"}


def test_hierarchy() -> None:
    assert issubclass(ConfigurationError, TelemetryError)
    assert issubclass(ClockSkewError, TelemetryError)
    assert isinstance(ClockSkewError("x"), Exception)
