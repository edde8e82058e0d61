from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import to_jsonable_python

from sdk_telemetry.core.constants import AuthenticationType

# Optional RawEvent fields; an unset value is left out of the payload.
_OMIT_WHEN_UNSET = frozenset({"no_xsrf_check"})


class Authentication(BaseModel):
    """How the instrumented call authenticated.

    Only the kind of credential is described, never the credential itself.
    """

    type: AuthenticationType = AuthenticationType.NONE
    scopes: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class RawEvent(BaseModel):
    """A single usage event as produced by an instrumented call site.

    Field names map to camelCase on the wire (``requestStatusCode`` etc.);
    both spellings are accepted when constructing.
    """

    lib_version: str = Field(alias="libVersion")
    lib_version_hash: str = Field(alias="libVersionHash")
    method_name: str = Field(alias="methodName")
    authentication: Authentication = Field(default_factory=Authentication)
    base_request_config_used: bool = Field(default=False, alias="baseRequestConfigUsed")
    on_response_middleware_used: bool = Field(default=False, alias="onResponseMiddlewareUsed")
    on_error_middleware_used: bool = Field(default=False, alias="onErrorMiddlewareUsed")
    callback_used: bool = Field(default=False, alias="callbackUsed")
    query_exists: bool = Field(default=False, alias="queryExists")
    body_exists: bool = Field(default=False, alias="bodyExists")
    headers_exists: bool = Field(default=False, alias="headersExists")
    request_status_code: int = Field(alias="requestStatusCode")
    request_start_time: datetime = Field(alias="requestStartTime")
    request_end_time: datetime = Field(alias="requestEndTime")
    no_xsrf_check: bool | None = Field(default=None, alias="noXsrfCheck")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def wire_name(cls, field_name: str) -> str:
        """Return the camelCase key used for *field_name* in upload payloads."""
        return cls.model_fields[field_name].alias or field_name


class PreparedRecord(BaseModel):
    """A redacted event plus the metadata stamped on by the client.

    ``fields`` holds only what survived redaction, keyed by
    :class:`RawEvent` field name with the original values.
    ``time_difference`` is the remote-minus-local clock offset in whole
    seconds, or ``None`` when the offset could not be determined.
    """

    fields: dict[str, Any]
    telemetry_client_version: str
    telemetry_client_version_hash: str
    time_difference: int | None = None

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict the collection endpoint expects.

        Optional event fields left unset (``None``) are omitted rather than
        sent as ``null``.
        """
        payload: dict[str, Any] = {
            RawEvent.wire_name(name): to_jsonable_python(value, by_alias=True)
            for name, value in self.fields.items()
            if not (value is None and name in _OMIT_WHEN_UNSET)
        }
        payload["telemetryClientVersion"] = self.telemetry_client_version
        payload["telemetryClientVersionHash"] = self.telemetry_client_version_hash
        payload["timeDifference"] = self.time_difference
        return payload
