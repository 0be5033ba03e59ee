from __future__ import annotations

from typing import Protocol, Sequence


class Transport(Protocol):
    """
    Канал доставки. Сегментацию определяет сам транспорт (divide_message),
    т.к. емкость части зависит от кодировки текста.
    """

    @property
    def name(self) -> str:
        ...

    def divide_message(self, body: str) -> list[str]:
        ...

    def send_text(self, address: str, body: str) -> None:
        ...

    def send_multipart(self, address: str, parts: Sequence[str]) -> None:
        ...
