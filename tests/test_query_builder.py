from __future__ import annotations

import pytest

from smsbridge.core.query import Box, MessageFilter, Predicate, build_query


@pytest.mark.parametrize(
    ("count", "expected"),
    [(-5, 1), (0, 1), (1, 1), (20, 20), (99, 99), (100, 100), (101, 100), (500, 100)],
)
def test_limit_is_clamped(count: int, expected: int) -> None:
    assert build_query(MessageFilter(), count).limit == expected


@pytest.mark.parametrize("search,address", [(None, None), ("", ""), (None, ""), ("", None)])
def test_empty_filter_has_no_predicates(search, address) -> None:  # noqa: ANN001
    spec = build_query(MessageFilter(search=search, address=address), 10)
    assert spec.predicates == ()
    assert spec.selection is None
    assert spec.selection_args == ()


def test_body_predicate_comes_before_address_predicate() -> None:
    spec = build_query(MessageFilter(search="abc", address="555"), 10)

    assert spec.predicates == (Predicate("body", "abc"), Predicate("address", "555"))
    assert spec.selection == "body LIKE ? AND address LIKE ?"
    assert spec.selection_args == ("%abc%", "%555%")


def test_address_only_predicate() -> None:
    spec = build_query(MessageFilter(address="555"), 10)
    assert spec.selection == "address LIKE ?"
    assert spec.selection_args == ("%555%",)


@pytest.mark.parametrize(
    ("raw_box", "expected"),
    [("sent", Box.SENT), ("all", Box.ALL), ("inbox", Box.INBOX), ("outbox", Box.INBOX), ("", Box.INBOX), (None, Box.INBOX)],
)
def test_box_selects_collection(raw_box, expected: Box) -> None:  # noqa: ANN001
    spec = build_query(MessageFilter.from_mapping({"box": raw_box}), 10)
    assert spec.collection is expected


def test_sent_box_with_address_and_large_count() -> None:
    spec = build_query(MessageFilter.from_mapping({"box": "sent", "address": "12345"}), 500)

    assert spec.collection is Box.SENT
    assert spec.selection == "address LIKE ?"
    assert spec.selection_args == ("%12345%",)
    assert spec.limit == 100
    assert spec.order_by == "date DESC"


def test_from_mapping_defaults() -> None:
    assert MessageFilter.from_mapping(None) == MessageFilter(box=Box.INBOX, search=None, address=None)
    assert MessageFilter.from_mapping({"search": "", "address": ""}) == MessageFilter()
