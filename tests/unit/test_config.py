"""Tests for core/config.py — PrivacyConfig, resolve_privacy, TelemetrySettings."""
from __future__ import annotations

import pytest

from sdk_telemetry.__version__ import __version__, __version_hash__
from sdk_telemetry.core.config import PrivacyConfig, TelemetrySettings, resolve_privacy
from sdk_telemetry.core.constants import DEFAULT_TIME_SOURCE_URL
from sdk_telemetry.core.exceptions import ConfigurationError


# ---------------------------------------------------------------------------
# PrivacyConfig
# ---------------------------------------------------------------------------


def test_privacy_config_empty() -> None:
    cfg = PrivacyConfig()
    assert cfg.is_empty is True
    assert cfg.allowed_to_pass_request_timings is None


def test_privacy_config_explicit_none_is_not_empty() -> None:
    cfg = PrivacyConfig(allowed_to_pass_request_timings=None)
    assert cfg.is_empty is False


def test_privacy_config_accepts_camel_case_aliases() -> None:
    cfg = PrivacyConfig.model_validate(
        {"allowedToPassRequestTimings": False, "allowedToPassAuthenticationType": True}
    )
    assert cfg.allowed_to_pass_request_timings is False
    assert cfg.allowed_to_pass_authentication_type is True
    assert cfg.allowed_to_pass_request_status_code is None


# ---------------------------------------------------------------------------
# resolve_privacy
# ---------------------------------------------------------------------------


def test_resolve_privacy_none_allows_everything() -> None:
    assert resolve_privacy(None) is True


@pytest.mark.parametrize("value", [True, False])
def test_resolve_privacy_keeps_booleans(value: bool) -> None:
    assert resolve_privacy(value) is value


def test_resolve_privacy_keeps_config_instance() -> None:
    cfg = PrivacyConfig(allowed_to_pass_request_status_code=False)
    assert resolve_privacy(cfg) is cfg


def test_resolve_privacy_from_mapping() -> None:
    resolved = resolve_privacy({"allowed_to_pass_request_status_code": False})
    assert isinstance(resolved, PrivacyConfig)
    assert resolved.allowed_to_pass_request_status_code is False


def test_resolve_privacy_empty_mapping_is_empty_config() -> None:
    resolved = resolve_privacy({})
    assert isinstance(resolved, PrivacyConfig)
    assert resolved.is_empty


def test_resolve_privacy_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_privacy({"allowedToPassEverything": True})
    assert exc_info.value.code == "INVALID_PRIVACY_CONFIG"
    assert exc_info.value.details["errors"]


def test_resolve_privacy_rejects_other_types() -> None:
    with pytest.raises(ConfigurationError):
        resolve_privacy("yes")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TelemetrySettings
# ---------------------------------------------------------------------------


def test_settings_defaults() -> None:
    settings = TelemetrySettings()
    assert settings.endpoint is None
    assert settings.collection_url is None
    assert settings.time_source_url == DEFAULT_TIME_SOURCE_URL
    assert settings.debounce_seconds == 10.0
    assert settings.compress is True
    assert settings.client_version == __version__
    assert settings.client_version_hash == __version_hash__


def test_collection_url_appends_path() -> None:
    settings = TelemetrySettings(endpoint="https://collector.example.com/")
    assert settings.collection_url == "https://collector.example.com/telemetry"


def test_negative_debounce_rejected() -> None:
    with pytest.raises(ValueError):
        TelemetrySettings(debounce_seconds=-1)


_ENV_VARS = (
    "SDK_TELEMETRY_ENDPOINT",
    "SDK_TELEMETRY_TIME_SOURCE_URL",
    "SDK_TELEMETRY_DEBOUNCE_SECONDS",
    "SDK_TELEMETRY_COMPRESS",
    "SDK_TELEMETRY_LOG_LEVEL",
)


def test_from_env_defaults_when_not_set(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    assert TelemetrySettings.from_env() == TelemetrySettings()


def test_from_env_reads_all_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDK_TELEMETRY_ENDPOINT", "https://collector.example.com")
    monkeypatch.setenv("SDK_TELEMETRY_TIME_SOURCE_URL", "https://time.example.com/utc")
    monkeypatch.setenv("SDK_TELEMETRY_DEBOUNCE_SECONDS", "2.5")
    monkeypatch.setenv("SDK_TELEMETRY_COMPRESS", "false")
    monkeypatch.setenv("SDK_TELEMETRY_LOG_LEVEL", "debug")

    settings = TelemetrySettings.from_env()
    assert settings.collection_url == "https://collector.example.com/telemetry"
    assert settings.time_source_url == "https://time.example.com/utc"
    assert settings.debounce_seconds == 2.5
    assert settings.compress is False
    assert settings.log_level == "DEBUG"


def test_from_env_empty_values_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDK_TELEMETRY_ENDPOINT", "")
    monkeypatch.setenv("SDK_TELEMETRY_COMPRESS", "")
    settings = TelemetrySettings.from_env()
    assert settings.endpoint is None
    assert settings.compress is True


def test_from_env_invalid_debounce(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDK_TELEMETRY_DEBOUNCE_SECONDS", "soon")
    with pytest.raises(ConfigurationError) as exc_info:
        TelemetrySettings.from_env()
    assert exc_info.value.code == "INVALID_SETTINGS"
