from __future__ import annotations

import time
from typing import Sequence

from smsbridge.core.db import MessageRepository
from smsbridge.core.dispatch.segments import divide_message
from smsbridge.core.errors import TransportError
from smsbridge.core.normalize import MESSAGE_TYPE_SENT


class OutboxTransport:
    """Локальный транспорт: кладет отправленное сообщение в коллекцию sent хранилища."""

    def __init__(self, repository: MessageRepository):
        self.repository = repository

    @property
    def name(self) -> str:
        return "outbox"

    def divide_message(self, body: str) -> list[str]:
        return divide_message(body)

    def _store(self, address: str, body: str) -> None:
        if not address.strip():
            raise TransportError("Destination address is empty")
        self.repository.insert_message(
            address=address,
            body=body,
            date=int(time.time() * 1000),
            message_type=MESSAGE_TYPE_SENT,
            read=True,
        )

    def send_text(self, address: str, body: str) -> None:
        self._store(address, body)

    def send_multipart(self, address: str, parts: Sequence[str]) -> None:
        # Составное SMS хранится одной записью, как и на устройстве
        self._store(address, "".join(parts))
