from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    SMS_READ_ERROR = "SMS_READ_ERROR"
    SMS_SEND_ERROR = "SMS_SEND_ERROR"


class SmsBridgeError(Exception):
    """Базовый класс; code задают подклассы, у самой базы его нет."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PermissionDenied(SmsBridgeError):
    code = ErrorCode.PERMISSION_DENIED

    def __init__(self, capability: str):
        super().__init__(f"{capability} permission not granted")
        self.capability = capability


class ProviderError(SmsBridgeError):
    """Ошибка выполнения запроса или освобождения курсора в хранилище."""

    code = ErrorCode.SMS_READ_ERROR


class TransportError(SmsBridgeError):
    """Транспорт отклонил отправку; message содержит текст ошибки транспорта."""

    code = ErrorCode.SMS_SEND_ERROR


SendError = TransportError
