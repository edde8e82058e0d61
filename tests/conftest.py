"""Shared test fixtures."""
from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any

import pytest

from sdk_telemetry.core.constants import AuthenticationType
from sdk_telemetry.core.types import Authentication, RawEvent
from sdk_telemetry.telemetry.clock import reset_default_resolvers


def _make_event(**overrides: Any) -> RawEvent:
    fields: dict[str, Any] = {
        "lib_version": "2.4.0",
        "lib_version_hash": "a1b2c3d",
        "method_name": "issues.getIssue",
        "authentication": Authentication(type=AuthenticationType.BASIC),
        "base_request_config_used": True,
        "on_response_middleware_used": False,
        "on_error_middleware_used": True,
        "callback_used": False,
        "query_exists": True,
        "body_exists": False,
        "headers_exists": True,
        "request_status_code": 200,
        "request_start_time": datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc),
        "request_end_time": datetime(2026, 3, 1, 12, 0, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return RawEvent(**fields)


@pytest.fixture
def event_factory() -> Callable[..., RawEvent]:
    return _make_event


@pytest.fixture
def raw_event() -> RawEvent:
    return _make_event()


@pytest.fixture(autouse=True)
def _fresh_default_resolvers() -> Iterator[None]:
    reset_default_resolvers()
    yield
    reset_default_resolvers()
