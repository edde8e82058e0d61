"""Clock-skew resolution against a trusted remote time source.

The offset is looked up once per process and time source.  Concurrent
callers share a single in-flight request, and whatever it settles on
(an offset or "unknown") is kept for the life of the process.
"""

from __future__ import annotations

import asyncio
import math
from datetime import datetime, timezone
from typing import Callable

import httpx

from sdk_telemetry.core.constants import DEFAULT_TIME_SOURCE_URL, SkewStatus
from sdk_telemetry.core.exceptions import ClockSkewError
from sdk_telemetry.utils.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClockSkewResolver:
    """Resolve and cache the remote-minus-local clock offset in whole seconds.

    Args:
        time_source_url: GET endpoint answering with JSON that carries an
            ISO-8601 ``datetime`` field.
        http_client: Optional shared ``httpx.AsyncClient``.  When omitted a
            short-lived client is opened for the single lookup.
        clock: Returns the local "now"; read after the response arrives.
    """

    def __init__(
        self,
        time_source_url: str = DEFAULT_TIME_SOURCE_URL,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._url = time_source_url
        self._http_client = http_client
        self._clock = clock
        self._status = SkewStatus.UNRESOLVED
        self._offset: int | None = None
        self._pending: asyncio.Future[int | None] | None = None

    @property
    def time_source_url(self) -> str:
        return self._url

    @property
    def status(self) -> SkewStatus:
        return self._status

    @property
    def offset(self) -> int | None:
        """The cached offset; ``None`` until resolved, or when unknown."""
        return self._offset

    async def resolve(self) -> int | None:
        """Return the clock offset in seconds, or ``None`` if it is unknown.

        Only the first call performs a network request; every other call,
        concurrent or later, gets the same result.

        The in-flight lookup belongs to the event loop that started it.  A
        caller on another loop gets ``None`` while that lookup is running
        and the cached offset once it has settled.
        """
        if self._status is SkewStatus.RESOLVED:
            return self._offset

        if self._pending is None or self._pending.cancelled():
            self._status = SkewStatus.RESOLVING
            self._pending = asyncio.ensure_future(self._resolve_once())

        pending = self._pending
        if pending.get_loop() is not asyncio.get_running_loop():
            logger.debug("clock_skew_pending_on_other_loop", url=self._url)
            return None
        try:
            return await asyncio.shield(pending)
        except asyncio.CancelledError:
            if pending.cancelled() and self._status is SkewStatus.RESOLVING:
                # The lookup itself died with its event loop; let a later call retry.
                self._pending = None
                self._status = SkewStatus.UNRESOLVED
            raise

    async def _resolve_once(self) -> int | None:
        offset: int | None = None
        try:
            remote = await self._fetch_remote_time()
            local = self._clock()
            offset = math.floor((remote - local).total_seconds())
        except Exception:
            logger.warning("clock_skew_unavailable", url=self._url, exc_info=True)

        self._offset = offset
        self._status = SkewStatus.RESOLVED
        logger.debug("clock_skew_resolved", url=self._url, offset=offset)
        return offset

    async def _fetch_remote_time(self) -> datetime:
        should_close = False
        client = self._http_client
        if client is None:
            client = httpx.AsyncClient()
            should_close = True

        try:
            response = await client.get(self._url)
            response.raise_for_status()
            data = response.json()
        finally:
            if should_close:
                await client.aclose()

        raw = data.get("datetime") if isinstance(data, dict) else None
        if not isinstance(raw, str):
            raise ClockSkewError(
                "Time source response has no 'datetime' string",
                code="MALFORMED_TIME_RESPONSE",
                details={"url": self._url},
            )
        try:
            remote = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ClockSkewError(
                f"Unparseable time source datetime: {raw!r}",
                code="MALFORMED_TIME_RESPONSE",
                details={"url": self._url},
            ) from exc

        if remote.tzinfo is None:
            remote = remote.replace(tzinfo=timezone.utc)
        return remote


_default_resolvers: dict[str, ClockSkewResolver] = {}


def get_default_resolver(time_source_url: str = DEFAULT_TIME_SOURCE_URL) -> ClockSkewResolver:
    """Return the process-wide resolver for *time_source_url*, creating it lazily."""
    resolver = _default_resolvers.get(time_source_url)
    if resolver is None:
        resolver = ClockSkewResolver(time_source_url)
        _default_resolvers[time_source_url] = resolver
    return resolver


def reset_default_resolvers() -> None:
    """Forget every process-wide resolver (intended for tests)."""
    _default_resolvers.clear()
