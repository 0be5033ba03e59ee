from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

MIN_LIMIT = 1
MAX_LIMIT = 100
ORDER_BY = "date DESC"


class Box(str, Enum):
    INBOX = "inbox"
    SENT = "sent"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | Box | None) -> Box:
        if isinstance(value, Box):
            return value
        if value == "sent":
            return cls.SENT
        if value == "all":
            return cls.ALL
        return cls.INBOX


@dataclass(frozen=True, slots=True)
class MessageFilter:
    box: Box = Box.INBOX
    search: str | None = None
    address: str | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> MessageFilter:
        """
        Принимает "сырой" фильтр (dict из CLI/JSON) и приводит к явной структуре.
        Неизвестный box -> inbox, пустые строки -> None. Ошибок не бывает.
        """
        if not mapping:
            return cls()
        return cls(
            box=Box.parse(mapping.get("box")),
            search=mapping.get("search") or None,
            address=mapping.get("address") or None,
        )


@dataclass(frozen=True, slots=True)
class Predicate:
    field: str
    value: str

    @property
    def clause(self) -> str:
        return f"{self.field} LIKE ?"

    @property
    def pattern(self) -> str:
        return f"%{self.value}%"


@dataclass(frozen=True, slots=True)
class QuerySpec:
    collection: Box
    predicates: tuple[Predicate, ...] = ()
    order_by: str = ORDER_BY
    limit: int = MAX_LIMIT

    @property
    def selection(self) -> str | None:
        if not self.predicates:
            return None
        return " AND ".join(predicate.clause for predicate in self.predicates)

    @property
    def selection_args(self) -> tuple[str, ...]:
        return tuple(predicate.pattern for predicate in self.predicates)


def clamp_limit(count: int) -> int:
    return min(max(count, MIN_LIMIT), MAX_LIMIT)


def build_query(message_filter: MessageFilter, count: int) -> QuerySpec:
    predicates: list[Predicate] = []
    if message_filter.search:
        predicates.append(Predicate("body", message_filter.search))
    if message_filter.address:
        predicates.append(Predicate("address", message_filter.address))

    return QuerySpec(
        collection=Box.parse(message_filter.box),
        predicates=tuple(predicates),
        order_by=ORDER_BY,
        limit=clamp_limit(count),
    )
