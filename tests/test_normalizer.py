from __future__ import annotations

import pytest

from smsbridge.core.normalize import MessageRecord, normalize_rows


def test_null_text_fields_become_empty_strings() -> None:
    records = normalize_rows([(7, None, None, 1767225600123, 1, 0)])

    assert records == [
        MessageRecord(id="7", address="", body="", date=1767225600123, type=1, read=False)
    ]


@pytest.mark.parametrize(
    ("raw_read", "expected"),
    [(1, True), ("1", True), (True, True), (0, False), ("0", False), (2, False), (None, False), ("yes", False)],
)
def test_read_flag(raw_read, expected: bool) -> None:  # noqa: ANN001
    (record,) = normalize_rows([("1", "+1555", "hi", 10, 1, raw_read)])
    assert record.read is expected


def test_order_and_timestamp_are_preserved() -> None:
    rows = [("3", "a", "c", 3000, 2, 1), ("2", "b", "b", 2000, 1, 1), ("1", "c", "a", 1000, 1, 0)]

    records = normalize_rows(rows)

    assert [r.id for r in records] == ["3", "2", "1"]
    assert [r.date for r in records] == [3000, 2000, 1000]
    assert records[0].type == 2


def test_missing_handle_is_empty() -> None:
    assert normalize_rows(None) == []
