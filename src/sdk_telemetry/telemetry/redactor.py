"""Field redaction: decide which parts of an event may leave the process."""

from __future__ import annotations

from typing import Any

from sdk_telemetry.core.config import PrivacySetting
from sdk_telemetry.core.types import RawEvent

# Fields controlled by each PrivacyConfig switch.  Every other RawEvent
# field is always sent once a non-empty config is given.
_GATED_FIELDS: dict[str, tuple[str, ...]] = {
    "allowed_to_pass_authentication_type": ("authentication",),
    "allowed_to_pass_request_status_code": ("request_status_code",),
    "allowed_to_pass_request_timings": ("request_start_time", "request_end_time"),
}


def allowed_fields(config: PrivacySetting) -> frozenset[str]:
    """Return the names of the :class:`RawEvent` fields *config* lets through."""
    if isinstance(config, bool):
        return frozenset(RawEvent.model_fields) if config else frozenset()
    if config.is_empty:
        return frozenset()

    blocked: set[str] = set()
    for switch, names in _GATED_FIELDS.items():
        if getattr(config, switch) is False:
            blocked.update(names)
    return frozenset(name for name in RawEvent.model_fields if name not in blocked)


def prepare(raw: RawEvent, config: PrivacySetting) -> dict[str, Any]:
    """Filter *raw* down to the fields *config* permits.

    An empty result means the event must not be queued at all.  Values are
    passed through untouched.
    """
    names = allowed_fields(config)
    return {name: getattr(raw, name) for name in RawEvent.model_fields if name in names}
