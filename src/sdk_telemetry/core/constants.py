from __future__ import annotations

from enum import StrEnum

DEFAULT_TIME_SOURCE_URL = "https://worldtimeapi.org/api/timezone/Etc/UTC"
DEFAULT_DEBOUNCE_SECONDS = 10.0
COLLECTION_PATH = "/telemetry"


class AuthenticationType(StrEnum):
    NONE = "none"
    BASIC = "basic"
    OAUTH = "oauth"
    OAUTH2 = "oauth2"
    PERSONAL_ACCESS_TOKEN = "personal_access_token"
    JWT = "jwt"


class SkewStatus(StrEnum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class UploadStatus(StrEnum):
    SKIPPED = "skipped"  # nothing queued, or no endpoint configured
    SENT = "sent"
    FAILED = "failed"
