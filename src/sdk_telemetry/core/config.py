from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from sdk_telemetry.__version__ import __version__, __version_hash__
from sdk_telemetry.core.constants import (
    COLLECTION_PATH,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_TIME_SOURCE_URL,
)
from sdk_telemetry.core.exceptions import ConfigurationError


class PrivacyConfig(BaseModel):
    """Per-category permissions for what leaves the process.

    A switch that is unset (or ``None``) counts as allowed.  A config with
    no switches given at all allows nothing, the same as ``False``.
    """

    allowed_to_pass_authentication_type: bool | None = Field(
        default=None, alias="allowedToPassAuthenticationType"
    )
    allowed_to_pass_request_status_code: bool | None = Field(
        default=None, alias="allowedToPassRequestStatusCode"
    )
    allowed_to_pass_request_timings: bool | None = Field(
        default=None, alias="allowedToPassRequestTimings"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @property
    def is_empty(self) -> bool:
        """True when no switch was provided."""
        return not self.model_fields_set


PrivacySetting = bool | PrivacyConfig


def resolve_privacy(config: bool | PrivacyConfig | Mapping[str, Any] | None) -> PrivacySetting:
    """Normalize whatever the host passed as telemetry consent.

    ``None`` means the host expressed no preference, which allows everything.

    Raises:
        ConfigurationError: If *config* is not a bool, a :class:`PrivacyConfig`,
            or a mapping of known permission switches.
    """
    if config is None:
        return True
    if isinstance(config, (bool, PrivacyConfig)):
        return config
    if isinstance(config, Mapping):
        try:
            return PrivacyConfig.model_validate(dict(config))
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid telemetry privacy config: {exc.error_count()} error(s)",
                code="INVALID_PRIVACY_CONFIG",
                details={"errors": exc.errors(include_url=False)},
            ) from exc
    raise ConfigurationError(
        f"Telemetry config must be a bool or a mapping, got {type(config).__name__}",
        code="INVALID_PRIVACY_CONFIG",
    )


class TelemetrySettings(BaseModel):
    endpoint: str | None = None
    """Base URL of the collection service; batches go to ``{endpoint}/telemetry``."""
    time_source_url: str = DEFAULT_TIME_SOURCE_URL
    debounce_seconds: float = Field(default=DEFAULT_DEBOUNCE_SECONDS, ge=0)
    compress: bool = True
    client_version: str = __version__
    client_version_hash: str = __version_hash__
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @property
    def collection_url(self) -> str | None:
        if not self.endpoint:
            return None
        return self.endpoint.rstrip("/") + COLLECTION_PATH

    @classmethod
    def from_env(cls) -> TelemetrySettings:
        """Create :class:`TelemetrySettings` from ``SDK_TELEMETRY_*`` environment variables.

        Reads the following env vars (all optional):

        * ``SDK_TELEMETRY_ENDPOINT`` → ``endpoint``
        * ``SDK_TELEMETRY_TIME_SOURCE_URL`` → ``time_source_url``
        * ``SDK_TELEMETRY_DEBOUNCE_SECONDS`` → ``debounce_seconds`` (float, >= 0)
        * ``SDK_TELEMETRY_COMPRESS`` → ``compress`` (``0``/``false``/``no`` disable)
        * ``SDK_TELEMETRY_LOG_LEVEL`` → ``log_level``

        Any variable that is not set or is empty is left at its default value.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        kwargs: dict[str, Any] = {}

        endpoint = os.environ.get("SDK_TELEMETRY_ENDPOINT")
        if endpoint:
            kwargs["endpoint"] = endpoint

        time_source_url = os.environ.get("SDK_TELEMETRY_TIME_SOURCE_URL")
        if time_source_url:
            kwargs["time_source_url"] = time_source_url

        debounce_str = os.environ.get("SDK_TELEMETRY_DEBOUNCE_SECONDS")
        if debounce_str:
            kwargs["debounce_seconds"] = debounce_str

        compress_str = os.environ.get("SDK_TELEMETRY_COMPRESS")
        if compress_str:
            kwargs["compress"] = compress_str.strip().lower() not in ("0", "false", "no", "off")

        log_level = os.environ.get("SDK_TELEMETRY_LOG_LEVEL")
        if log_level:
            kwargs["log_level"] = log_level.upper()

        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid SDK_TELEMETRY_* environment configuration",
                code="INVALID_SETTINGS",
                details={"errors": exc.errors(include_url=False)},
            ) from exc
