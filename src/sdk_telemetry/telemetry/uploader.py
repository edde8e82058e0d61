"""Batch upload of queued telemetry records."""

from __future__ import annotations

import gzip
import json

import httpx
from pydantic import BaseModel

from sdk_telemetry.core.constants import UploadStatus
from sdk_telemetry.core.types import PreparedRecord
from sdk_telemetry.telemetry.queue import BatchQueue
from sdk_telemetry.utils.logging import get_logger

logger = get_logger(__name__)


class UploadResult(BaseModel):
    """Outcome of a single :meth:`Uploader.flush`."""

    status: UploadStatus
    record_count: int = 0
    response_status: int | None = None
    error: str | None = None


class Uploader:
    """Drain a :class:`BatchQueue` into one POST to the collection endpoint.

    The queue is emptied as the request goes out, whatever happens to the
    request afterwards.  Nothing is retried and nothing is raised.

    Args:
        queue: The queue to drain.
        url: Full collection URL.  ``None`` discards batches.
        http_client: Optional shared ``httpx.AsyncClient``.  When omitted a
            short-lived client is opened per flush.
        compress: Gzip the body and send ``Content-Encoding: gzip``.
    """

    def __init__(
        self,
        queue: BatchQueue,
        url: str | None,
        *,
        http_client: httpx.AsyncClient | None = None,
        compress: bool = True,
    ) -> None:
        self._queue = queue
        self._url = url
        self._http_client = http_client
        self._compress = compress

    @staticmethod
    def serialize(records: list[PreparedRecord]) -> bytes:
        """Encode *records* as a JSON array."""
        return json.dumps([r.to_payload() for r in records], default=str).encode("utf-8")

    async def flush(self) -> UploadResult:
        if not self._queue:
            return UploadResult(status=UploadStatus.SKIPPED)

        records = self._queue.snapshot()
        self._queue.clear()

        if self._url is None:
            logger.warning("telemetry_endpoint_missing", discarded=len(records))
            return UploadResult(status=UploadStatus.SKIPPED, record_count=len(records))

        try:
            response = await self._post(self._url, self.serialize(records))
        except Exception as exc:
            logger.debug(
                "telemetry_upload_error",
                url=self._url,
                records=len(records),
                error=str(exc),
            )
            return UploadResult(
                status=UploadStatus.FAILED,
                record_count=len(records),
                error=str(exc) or type(exc).__name__,
            )

        if not response.is_success:
            logger.debug(
                "telemetry_upload_rejected",
                url=self._url,
                records=len(records),
                status=response.status_code,
            )
            return UploadResult(
                status=UploadStatus.FAILED,
                record_count=len(records),
                response_status=response.status_code,
                error=f"HTTP {response.status_code}",
            )

        logger.debug("telemetry_uploaded", url=self._url, records=len(records))
        return UploadResult(
            status=UploadStatus.SENT,
            record_count=len(records),
            response_status=response.status_code,
        )

    async def _post(self, url: str, body: bytes) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        if self._compress:
            body = gzip.compress(body)
            headers["Content-Encoding"] = "gzip"

        should_close = False
        client = self._http_client
        if client is None:
            client = httpx.AsyncClient()
            should_close = True

        try:
            return await client.post(
                url,
                content=body,
                headers=headers,
                follow_redirects=False,
            )
        finally:
            if should_close:
                await client.aclose()
