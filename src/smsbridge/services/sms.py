from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Iterable, Mapping, Protocol, Sequence

from smsbridge.config import Settings
from smsbridge.core.db import MessageRepository
from smsbridge.core.dispatch import (
    LengthThresholdPolicy,
    MessageDispatcher,
    SegmentPolicy,
    SendRequest,
    SendResult,
)
from smsbridge.core.errors import ErrorCode, PermissionDenied, SmsBridgeError
from smsbridge.core.normalize import MessageRecord, normalize_rows
from smsbridge.core.permissions import AuthorizationGate, Capability, StaticAuthorizationGate
from smsbridge.core.query import MessageFilter, QuerySpec, build_query
from smsbridge.core.result import Err, Ok, Result
from smsbridge.transports import OutboxTransport, Transport, TwilioTransport

DEFAULT_COUNT = 20


class MessageProvider(Protocol):
    def open_cursor(self, spec: QuerySpec) -> AbstractContextManager[Iterable[Sequence[Any]] | None]:
        ...


class OperationState(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    REJECTED = "rejected"
    BUILDING = "building"
    QUERYING = "querying"
    DISPATCHING = "dispatching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SmsService:
    """
    Две независимые операции: чтение и отправка. Состояния между вызовами нет,
    любая ошибка превращается в Err(code, message) на границе операции.
    """

    def __init__(
        self,
        gate: AuthorizationGate,
        provider: MessageProvider,
        transport: Transport,
        logger: logging.Logger | logging.LoggerAdapter,
        policy: SegmentPolicy | None = None,
        default_count: int = DEFAULT_COUNT,
    ):
        self.gate = gate
        self.provider = provider
        self.transport = transport
        self.logger = logger
        self.policy = policy
        self.default_count = default_count

    def _transition(self, operation: str, state: OperationState) -> None:
        self.logger.debug("%s -> %s", operation, state.value)

    def _authorize(self, operation: str, capability: Capability) -> Err | None:
        self._transition(operation, OperationState.AUTHORIZING)
        if self.gate.check_capability(capability):
            return None
        denied = PermissionDenied(capability.value)
        self._transition(operation, OperationState.REJECTED)
        self.logger.warning("%s rejected: %s", operation, denied.message)
        return Err(denied.code, denied.message)

    @staticmethod
    def _failure(code: ErrorCode, exc: Exception) -> Err:
        if isinstance(exc, SmsBridgeError):
            return Err(code, exc.message)
        return Err(code, str(exc) or exc.__class__.__name__)

    def get_messages(
        self,
        message_filter: MessageFilter | Mapping[str, Any] | None = None,
        count: int | None = None,
    ) -> Result[list[MessageRecord]]:
        operation = "get_messages"
        self._transition(operation, OperationState.IDLE)
        try:
            rejected = self._authorize(operation, Capability.READ_SMS)
            if rejected is not None:
                return rejected

            self._transition(operation, OperationState.BUILDING)
            if not isinstance(message_filter, MessageFilter):
                message_filter = MessageFilter.from_mapping(message_filter)
            spec = build_query(message_filter, self.default_count if count is None else count)

            self._transition(operation, OperationState.QUERYING)
            with self.provider.open_cursor(spec) as rows:
                records = normalize_rows(rows)
        except Exception as exc:  # noqa: BLE001
            self._transition(operation, OperationState.FAILED)
            self.logger.exception("SMS read failed")
            return self._failure(ErrorCode.SMS_READ_ERROR, exc)

        self._transition(operation, OperationState.SUCCEEDED)
        self.logger.info(
            "SMS read: box=%s predicates=%s limit=%s rows=%s",
            spec.collection.value,
            len(spec.predicates),
            spec.limit,
            len(records),
        )
        return Ok(records)

    def send_message(self, address: str, body: str) -> Result[SendResult]:
        operation = "send_message"
        self._transition(operation, OperationState.IDLE)
        try:
            rejected = self._authorize(operation, Capability.SEND_SMS)
            if rejected is not None:
                return rejected

            self._transition(operation, OperationState.BUILDING)
            dispatcher = MessageDispatcher(self.transport, policy=self.policy, logger=self.logger)
            request = SendRequest(address=address, body=body)

            self._transition(operation, OperationState.DISPATCHING)
            result = dispatcher.send(request)
        except Exception as exc:  # noqa: BLE001
            self._transition(operation, OperationState.FAILED)
            self.logger.exception("SMS send failed")
            return self._failure(ErrorCode.SMS_SEND_ERROR, exc)

        self._transition(operation, OperationState.SUCCEEDED)
        return Ok(result)

    async def aget_messages(
        self,
        message_filter: MessageFilter | Mapping[str, Any] | None = None,
        count: int | None = None,
        timeout: float | None = None,
    ) -> Result[list[MessageRecord]]:
        # Поток не прерывается по таймауту: запрос доработает в фоне
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.get_messages, message_filter, count),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            self.logger.warning("SMS read timed out after %ss", timeout)
            return Err(ErrorCode.SMS_READ_ERROR, f"Timed out after {timeout}s")

    async def asend_message(
        self,
        address: str,
        body: str,
        timeout: float | None = None,
    ) -> Result[SendResult]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.send_message, address, body),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            self.logger.warning("SMS send timed out after %ss", timeout)
            return Err(ErrorCode.SMS_SEND_ERROR, f"Timed out after {timeout}s")


def create_sms_service(
    settings: Settings,
    repository: MessageRepository,
    logger: logging.Logger | logging.LoggerAdapter,
) -> SmsService:
    if settings.transport == "twilio":
        if settings.twilio is None:
            raise ValueError("SMSBRIDGE_TRANSPORT=twilio, но TWILIO_* ключи не заданы")
        transport: Transport = TwilioTransport(settings.twilio)
    else:
        transport = OutboxTransport(repository)

    return SmsService(
        gate=StaticAuthorizationGate.from_names(settings.granted_capabilities),
        provider=repository,
        transport=transport,
        logger=logger,
        policy=LengthThresholdPolicy(settings.single_segment_limit),
        default_count=settings.default_count,
    )
