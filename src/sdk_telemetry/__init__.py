"""sdk-telemetry: privacy-aware, debounced usage telemetry for client libraries."""

import logging

from sdk_telemetry.__version__ import __version__, __version_hash__

from sdk_telemetry.core.config import PrivacyConfig, TelemetrySettings, resolve_privacy
from sdk_telemetry.core.constants import AuthenticationType, SkewStatus, UploadStatus
from sdk_telemetry.core.exceptions import (
    ClockSkewError,
    ConfigurationError,
    TelemetryError,
)
from sdk_telemetry.core.types import Authentication, PreparedRecord, RawEvent
from sdk_telemetry.telemetry.client import TelemetryClient
from sdk_telemetry.telemetry.clock import ClockSkewResolver, get_default_resolver
from sdk_telemetry.telemetry.queue import BatchQueue
from sdk_telemetry.telemetry.redactor import prepare
from sdk_telemetry.telemetry.scheduler import DebouncedFlushScheduler
from sdk_telemetry.telemetry.uploader import Uploader, UploadResult
from sdk_telemetry.utils.logging import LIBRARY_LOGGER, configure_logging, get_logger

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "__version_hash__",
    "Authentication",
    "AuthenticationType",
    "BatchQueue",
    "ClockSkewError",
    "ClockSkewResolver",
    "ConfigurationError",
    "DebouncedFlushScheduler",
    "PreparedRecord",
    "PrivacyConfig",
    "RawEvent",
    "SkewStatus",
    "TelemetryClient",
    "TelemetryError",
    "TelemetrySettings",
    "UploadResult",
    "UploadStatus",
    "Uploader",
    "configure_logging",
    "get_default_resolver",
    "get_logger",
    "prepare",
    "resolve_privacy",
]
