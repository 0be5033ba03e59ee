from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from smsbridge.core.normalize import MESSAGE_TYPE_RECEIVED


@dataclass(slots=True)
class ImportedMessage:
    external_id: str | None
    address: str | None
    body: str | None
    date: int
    type: int = MESSAGE_TYPE_RECEIVED
    read: bool = False
    thread_id: str | None = None


def _parse_item(item: dict[str, Any]) -> ImportedMessage:
    if "date" not in item:
        raise ValueError(f"Message without date: {item}")
    raw_id = item.get("id")
    thread_id = item.get("thread_id")
    return ImportedMessage(
        external_id=str(raw_id) if raw_id is not None else None,
        address=item.get("address"),
        body=item.get("body"),
        date=int(item["date"]),
        type=int(item.get("type", MESSAGE_TYPE_RECEIVED)),
        read=item.get("read") in (True, 1),
        thread_id=str(thread_id) if thread_id is not None else None,
    )


def load_messages_json(path: Path) -> list[ImportedMessage]:
    """Формат: список объектов {id?, address, body, date (epoch ms), type?, read?, thread_id?}."""
    with path.open("r", encoding="utf-8-sig") as fh:
        payload = json.load(fh)
    if isinstance(payload, dict):
        payload = payload.get("messages", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of messages in {path}")
    return [_parse_item(item) for item in payload]
