from __future__ import annotations

from dataclasses import asdict, dataclass

MESSAGE_TYPE_RECEIVED = 1
MESSAGE_TYPE_SENT = 2


@dataclass(frozen=True, slots=True)
class MessageRecord:
    id: str
    address: str
    body: str
    date: int
    type: int
    read: bool

    @property
    def is_received(self) -> bool:
        return self.type == MESSAGE_TYPE_RECEIVED

    def to_dict(self) -> dict:
        return asdict(self)
