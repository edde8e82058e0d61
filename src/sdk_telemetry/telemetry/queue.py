from __future__ import annotations

from collections.abc import Iterator

from sdk_telemetry.core.types import PreparedRecord


class BatchQueue:
    """In-memory, insertion-ordered buffer of records awaiting upload.

    Append-only with no size cap and no deduplication.  The only way
    records leave is :meth:`clear`, which the uploader calls once per
    dispatch.
    """

    def __init__(self) -> None:
        self._records: list[PreparedRecord] = []

    def append(self, record: PreparedRecord) -> None:
        self._records.append(record)

    def snapshot(self) -> list[PreparedRecord]:
        """Return a copy of the queued records, oldest first."""
        return list(self._records)

    def clear(self) -> None:
        """Empty the queue in place."""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PreparedRecord]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"BatchQueue(size={len(self._records)})"
