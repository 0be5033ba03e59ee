"""
Правила сегментации SMS.

GSM 03.38 (7 бит): 160 септетов в одиночном SMS, 153 в каждой части составного
(7 септетов уходят на UDH). Символы расширенной таблицы стоят 2 септета и не
разрываются между частями. Все остальное кодируется UCS-2: 70 / 67 единиц UTF-16,
суррогатная пара не разрывается.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

GSM7_BASIC = frozenset(
    "@£$¥èéùìòÇ\nØø\rÅåΔ_ΦΓΛΩΠΨΣΘΞÆæßÉ !\"#¤%&'()*+,-./0123456789:;<=>?"
    "¡ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÑÜ§¿abcdefghijklmnopqrstuvwxyzäöñüà"
)
GSM7_EXTENSION = frozenset("^{}\\[~]|€\f")

GSM7_SINGLE_LIMIT = 160
GSM7_PART_LIMIT = 153
UCS2_SINGLE_LIMIT = 70
UCS2_PART_LIMIT = 67


class SmsEncoding(str, Enum):
    GSM7 = "gsm7"
    UCS2 = "ucs2"


def detect_encoding(body: str) -> SmsEncoding:
    if all(ch in GSM7_BASIC or ch in GSM7_EXTENSION for ch in body):
        return SmsEncoding.GSM7
    return SmsEncoding.UCS2


def _gsm7_cost(ch: str) -> int:
    return 2 if ch in GSM7_EXTENSION else 1


def _ucs2_cost(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def _limits(encoding: SmsEncoding) -> tuple[int, int, Callable[[str], int]]:
    if encoding is SmsEncoding.GSM7:
        return GSM7_SINGLE_LIMIT, GSM7_PART_LIMIT, _gsm7_cost
    return UCS2_SINGLE_LIMIT, UCS2_PART_LIMIT, _ucs2_cost


def utf16_length(body: str) -> int:
    return sum(_ucs2_cost(ch) for ch in body)


def message_units(body: str) -> int:
    _, _, cost = _limits(detect_encoding(body))
    return sum(cost(ch) for ch in body)


def divide_message(body: str) -> list[str]:
    single_limit, part_limit, cost = _limits(detect_encoding(body))
    if sum(cost(ch) for ch in body) <= single_limit:
        return [body]

    segments: list[str] = []
    current: list[str] = []
    used = 0
    for ch in body:
        ch_cost = cost(ch)
        if used + ch_cost > part_limit:
            segments.append("".join(current))
            current = []
            used = 0
        current.append(ch)
        used += ch_cost
    if current:
        segments.append("".join(current))
    return segments


class SegmentPolicy(Protocol):
    def fits_single(self, body: str) -> bool:
        ...


class LengthThresholdPolicy:
    """
    Порог по длине в единицах UTF-16 (как String.length на устройстве): эмодзи
    считается за 2. 160 по умолчанию, настраивается через SMSBRIDGE_SINGLE_SEGMENT_LIMIT.
    """

    def __init__(self, limit: int = GSM7_SINGLE_LIMIT):
        if limit < 1:
            raise ValueError(f"Single segment limit must be positive: {limit}")
        self.limit = limit

    def fits_single(self, body: str) -> bool:
        return utf16_length(body) <= self.limit


class EncodingAwarePolicy:
    def fits_single(self, body: str) -> bool:
        single_limit, _, _ = _limits(detect_encoding(body))
        return message_units(body) <= single_limit
