from __future__ import annotations

from pathlib import Path

import pytest

from smsbridge.config import Settings


def test_settings_defaults(monkeypatch, tmp_path: Path) -> None:
    for key in [
        "SMSBRIDGE_GRANTED_CAPABILITIES",
        "SMSBRIDGE_SINGLE_SEGMENT_LIMIT",
        "SMSBRIDGE_DEFAULT_COUNT",
        "SMSBRIDGE_TRANSPORT",
        "TWILIO_ACCOUNT_SID",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SMSBRIDGE_HOME", str(tmp_path))

    settings = Settings.load(base_dir=tmp_path)

    assert settings.db_path == (tmp_path / "data" / "sms.sqlite3").resolve()
    assert settings.granted_capabilities == ["read", "send"]
    assert settings.single_segment_limit == 160
    assert settings.default_count == 20
    assert settings.transport == "outbox"
    assert settings.twilio is None


def test_settings_reads_capabilities_and_twilio(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMSBRIDGE_HOME", str(tmp_path))
    monkeypatch.setenv("SMSBRIDGE_GRANTED_CAPABILITIES", " READ ,")
    monkeypatch.setenv("SMSBRIDGE_SINGLE_SEGMENT_LIMIT", "70")
    monkeypatch.setenv("SMSBRIDGE_TRANSPORT", "twilio")
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "secret")
    monkeypatch.setenv("TWILIO_FROM_NUMBER", "+15550001111")

    settings = Settings.load(base_dir=tmp_path)

    assert settings.granted_capabilities == ["read"]
    assert settings.single_segment_limit == 70
    assert settings.transport == "twilio"
    assert settings.twilio is not None
    assert settings.twilio.from_number == "+15550001111"
    assert settings.twilio.timeout_sec == 30.0


def test_settings_empty_capabilities_grant_nothing(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMSBRIDGE_HOME", str(tmp_path))
    monkeypatch.setenv("SMSBRIDGE_GRANTED_CAPABILITIES", "")

    assert Settings.load(base_dir=tmp_path).granted_capabilities == []


def test_settings_rejects_unknown_transport(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMSBRIDGE_HOME", str(tmp_path))
    monkeypatch.setenv("SMSBRIDGE_TRANSPORT", "carrier-pigeon")

    with pytest.raises(ValueError):
        Settings.load(base_dir=tmp_path)
