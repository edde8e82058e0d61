from sdk_telemetry.telemetry.client import TelemetryClient
from sdk_telemetry.telemetry.clock import (
    ClockSkewResolver,
    get_default_resolver,
    reset_default_resolvers,
)
from sdk_telemetry.telemetry.queue import BatchQueue
from sdk_telemetry.telemetry.redactor import allowed_fields, prepare
from sdk_telemetry.telemetry.scheduler import DebouncedFlushScheduler
from sdk_telemetry.telemetry.uploader import Uploader, UploadResult

__all__ = [
    "BatchQueue",
    "ClockSkewResolver",
    "DebouncedFlushScheduler",
    "TelemetryClient",
    "UploadResult",
    "Uploader",
    "allowed_fields",
    "get_default_resolver",
    "prepare",
    "reset_default_resolvers",
]
