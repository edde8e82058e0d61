from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx

from sdk_telemetry.core.config import (
    PrivacyConfig,
    PrivacySetting,
    TelemetrySettings,
    resolve_privacy,
)
from sdk_telemetry.core.constants import UploadStatus
from sdk_telemetry.core.types import PreparedRecord, RawEvent
from sdk_telemetry.telemetry.clock import ClockSkewResolver, get_default_resolver
from sdk_telemetry.telemetry.queue import BatchQueue
from sdk_telemetry.telemetry.redactor import prepare
from sdk_telemetry.telemetry.scheduler import DebouncedFlushScheduler
from sdk_telemetry.telemetry.uploader import Uploader, UploadResult
from sdk_telemetry.utils.logging import get_logger

logger = get_logger(__name__)


class TelemetryClient:
    """Collect usage events from a library and ship them in debounced batches.

    Events are redacted per the privacy config, stamped with the client
    version and the process-wide clock offset, queued, and uploaded in a
    single request once submissions pause for ``debounce_seconds``.
    Telemetry never affects the host: no method raises because of a
    telemetry failure.

    Example::

        telemetry = TelemetryClient(
            {"allowedToPassRequestTimings": False},
            settings=TelemetrySettings(endpoint="https://collector.example.com"),
        )
        telemetry.submit(event)
        ...
        await telemetry.aclose()

    Args:
        config: ``True``/``False``, a :class:`PrivacyConfig`, or a mapping of
            its switches.  ``None`` allows everything.
        settings: Endpoints, debounce window and client version metadata.
        resolver: Clock-skew resolver to share.  Defaults to the process-wide
            resolver for ``settings.time_source_url``.
        http_client: Optional ``httpx.AsyncClient`` used for uploads.
        loop: Event loop for the flush timer; defaults to the running loop.

    Raises:
        ConfigurationError: If *config* is not a valid privacy config.
    """

    def __init__(
        self,
        config: bool | PrivacyConfig | Mapping[str, Any] | None = None,
        *,
        settings: TelemetrySettings | None = None,
        resolver: ClockSkewResolver | None = None,
        http_client: httpx.AsyncClient | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._privacy = resolve_privacy(config)
        self._settings = settings or TelemetrySettings()
        self._resolver = (
            resolver
            if resolver is not None
            else get_default_resolver(self._settings.time_source_url)
        )
        self._queue = BatchQueue()
        self._uploader = Uploader(
            self._queue,
            self._settings.collection_url,
            http_client=http_client,
            compress=self._settings.compress,
        )
        self._scheduler = DebouncedFlushScheduler(
            self._uploader.flush,
            self._settings.debounce_seconds,
            loop=loop,
        )
        self._submissions: set[asyncio.Task[PreparedRecord | None]] = set()

    @property
    def privacy(self) -> PrivacySetting:
        return self._privacy

    @property
    def settings(self) -> TelemetrySettings:
        return self._settings

    @property
    def queue(self) -> BatchQueue:
        return self._queue

    @property
    def resolver(self) -> ClockSkewResolver:
        return self._resolver

    @property
    def scheduler(self) -> DebouncedFlushScheduler:
        return self._scheduler

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    def submit(self, event: RawEvent) -> None:
        """Queue *event* in the background.  Fire-and-forget; never raises."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("telemetry_no_event_loop")
            return
        task = loop.create_task(self.send(event))
        self._submissions.add(task)
        task.add_done_callback(self._submissions.discard)

    async def send(self, event: RawEvent) -> PreparedRecord | None:
        """Redact, stamp and queue *event*, then re-arm the flush timer.

        Returns the queued record, or ``None`` if the event was dropped by
        the privacy config or could not be prepared.  Never raises.
        """
        try:
            fields = prepare(event, self._privacy)
            if not fields:
                return None

            time_difference = await self._resolver.resolve()
            record = PreparedRecord(
                fields=fields,
                telemetry_client_version=self._settings.client_version,
                telemetry_client_version_hash=self._settings.client_version_hash,
                time_difference=time_difference,
            )
            self._queue.append(record)
            self._scheduler.arm()
            return record
        except Exception:
            logger.debug("telemetry_submit_failed", exc_info=True)
            return None

    # ------------------------------------------------------------------ #
    # Flush & lifecycle
    # ------------------------------------------------------------------ #

    async def flush(self) -> UploadResult:
        """Upload whatever is queued right now instead of waiting for the timer."""
        self._scheduler.cancel()
        try:
            return await self._uploader.flush()
        except Exception as exc:
            logger.debug("telemetry_flush_failed", exc_info=True)
            return UploadResult(status=UploadStatus.FAILED, error=str(exc))

    async def aclose(self) -> None:
        """Finish in-flight submissions and upload anything still queued."""
        while self._submissions:
            await asyncio.gather(*self._submissions, return_exceptions=True)
        await self.flush()
        await self._scheduler.wait_idle()

    async def __aenter__(self) -> TelemetryClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"TelemetryClient(privacy={self._privacy!r}, "
            f"endpoint={self._settings.collection_url!r}, queued={len(self._queue)})"
        )
