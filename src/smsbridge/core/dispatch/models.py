from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class SendRequest:
    address: str
    body: str


@dataclass(frozen=True, slots=True)
class SendResult:
    success: bool
    message: str
    segments: int = 1

    def to_dict(self) -> dict:
        return asdict(self)
