from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path

import pytest

from smsbridge.config import Settings
from smsbridge.core.db import MessageRepository
from smsbridge.core.dispatch import divide_message
from smsbridge.core.permissions import Capability


@pytest.fixture()
def repository(tmp_path: Path):
    db_path = tmp_path / "sms.sqlite3"
    repo = MessageRepository(db_path)
    repo.migrate()
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture()
def settings(tmp_path: Path, monkeypatch) -> Settings:  # noqa: ANN001
    for key in ["SMSBRIDGE_HOME", "SMSBRIDGE_DB_PATH", "SMSBRIDGE_TRANSPORT", "SMSBRIDGE_GRANTED_CAPABILITIES"]:
        monkeypatch.delenv(key, raising=False)
    root = tmp_path / "project"
    root.mkdir(parents=True, exist_ok=True)
    s = Settings.load(base_dir=root)
    s.ensure_directories()
    return s


@pytest.fixture()
def test_logger() -> logging.Logger:
    logger = logging.getLogger("smsbridge-test")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.INFO)
    return logger


class RecordingGate:
    def __init__(self, *granted: Capability, error: Exception | None = None):
        self.granted = set(granted)
        self.error = error
        self.calls: list[Capability] = []

    def check_capability(self, capability: Capability) -> bool:
        self.calls.append(capability)
        if self.error is not None:
            raise self.error
        return capability in self.granted


class RecordingProvider:
    """Отдает заранее заданные строки и запоминает запросы и закрытие курсора."""

    def __init__(self, rows=None, error: Exception | None = None):  # noqa: ANN001
        self.rows = rows
        self.error = error
        self.specs = []
        self.released = 0

    @contextmanager
    def open_cursor(self, spec):  # noqa: ANN001
        self.specs.append(spec)
        if self.error is not None:
            raise self.error
        try:
            yield self.rows
        finally:
            self.released += 1


class RecordingTransport:
    name = "recording"

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.single: list[tuple[str, str]] = []
        self.multipart: list[tuple[str, list[str]]] = []

    def divide_message(self, body: str) -> list[str]:
        return divide_message(body)

    def send_text(self, address: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.single.append((address, body))

    def send_multipart(self, address: str, parts) -> None:  # noqa: ANN001
        if self.error is not None:
            raise self.error
        self.multipart.append((address, list(parts)))

    @property
    def calls(self) -> int:
        return len(self.single) + len(self.multipart)


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()
