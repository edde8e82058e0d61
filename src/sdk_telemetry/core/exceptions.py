from __future__ import annotations

from typing import Any


class TelemetryError(Exception):
    """Base exception for all sdk-telemetry errors.

    None of these ever reach code that submits events: the client catches
    them at its boundary and degrades to dropping telemetry.

    Attributes:
        code: Optional machine-readable error code (e.g. ``"MALFORMED_TIME_RESPONSE"``).
        details: Arbitrary key/value context about the error.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(TelemetryError):
    """Invalid privacy configuration or settings supplied by the host."""


class ClockSkewError(TelemetryError):
    """The time source answered, but not with a usable ``datetime``."""
