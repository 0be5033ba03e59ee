from __future__ import annotations

from typing import Any, Iterable, Sequence

from .models import MessageRecord

# Порядок колонок в проекции провайдера
COLUMNS = ("id", "address", "body", "date", "type", "read")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _flag(value: Any) -> bool:
    # Колонка read целочисленная, но драйвер может отдать строку "1"
    try:
        return int(value) == 1
    except (TypeError, ValueError):
        return False


def normalize_row(row: Sequence[Any]) -> MessageRecord:
    raw_id, address, body, date, message_type, read = tuple(row)[: len(COLUMNS)]
    return MessageRecord(
        id=_text(raw_id),
        address=_text(address),
        body=_text(body),
        date=int(date or 0),
        type=int(message_type or 0),
        read=_flag(read),
    )


def normalize_rows(rows: Iterable[Sequence[Any]] | None) -> list[MessageRecord]:
    """Порядок строк сохраняется: провайдер уже отсортировал их по date DESC."""
    if rows is None:
        return []
    return [normalize_row(row) for row in rows]
