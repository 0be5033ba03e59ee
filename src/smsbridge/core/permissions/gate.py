from __future__ import annotations

from enum import Enum
from typing import Iterable, Protocol


class Capability(str, Enum):
    READ_SMS = "READ_SMS"
    SEND_SMS = "SEND_SMS"


CAPABILITY_ALIASES = {
    "read": Capability.READ_SMS,
    "read_sms": Capability.READ_SMS,
    "send": Capability.SEND_SMS,
    "send_sms": Capability.SEND_SMS,
}


class AuthorizationGate(Protocol):
    def check_capability(self, capability: Capability) -> bool:
        ...


class StaticAuthorizationGate:
    """Выдает фиксированный набор разрешений (обычно из настроек)."""

    def __init__(self, granted: Iterable[Capability]):
        self._granted = frozenset(granted)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> StaticAuthorizationGate:
        granted: list[Capability] = []
        for name in names:
            capability = CAPABILITY_ALIASES.get(name.strip().lower())
            if capability is None:
                raise ValueError(f"Unknown capability: {name}")
            granted.append(capability)
        return cls(granted)

    def check_capability(self, capability: Capability) -> bool:
        return capability in self._granted
