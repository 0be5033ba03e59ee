from __future__ import annotations

import pytest

from conftest import RecordingTransport
from smsbridge.core.dispatch import LengthThresholdPolicy, MessageDispatcher, SendRequest
from smsbridge.core.errors import SendError, TransportError


def test_body_of_160_is_sent_as_one_segment(transport: RecordingTransport) -> None:
    result = MessageDispatcher(transport).send(SendRequest("+15551234", "a" * 160))

    assert transport.single == [("+15551234", "a" * 160)]
    assert transport.multipart == []
    assert result.success is True
    assert result.message == "SMS sent to +15551234"
    assert result.segments == 1


def test_body_of_161_is_sent_as_multipart(transport: RecordingTransport) -> None:
    body = "0123456789" * 16 + "X"

    result = MessageDispatcher(transport).send(SendRequest("+15551234", body))

    assert transport.single == []
    (address, parts), = transport.multipart
    assert address == "+15551234"
    assert len(parts) == 2
    assert "".join(parts) == body
    assert result.segments == 2


def test_astral_characters_count_twice_against_threshold(transport: RecordingTransport) -> None:
    dispatcher = MessageDispatcher(transport)

    dispatcher.send(SendRequest("1", "😀" * 80))
    result = dispatcher.send(SendRequest("2", "😀" * 81))

    assert transport.single == [("1", "😀" * 80)]
    (address, parts), = transport.multipart
    assert address == "2"
    assert "".join(parts) == "😀" * 81
    assert result.segments == len(parts) == 3


def test_threshold_comes_from_policy(transport: RecordingTransport) -> None:
    MessageDispatcher(transport, policy=LengthThresholdPolicy(10)).send(SendRequest("1", "a" * 11))

    assert transport.single == []
    # Правило сегментации транспорта: 11 GSM-символов помещаются в одну часть
    assert transport.multipart == [("1", ["a" * 11])]


def test_transport_error_is_propagated_as_is() -> None:
    transport = RecordingTransport(error=TransportError("radio off"))

    with pytest.raises(SendError) as exc_info:
        MessageDispatcher(transport).send(SendRequest("1", "hi"))

    assert exc_info.value.message == "radio off"


def test_unexpected_transport_failure_is_wrapped() -> None:
    transport = RecordingTransport(error=RuntimeError("generic failure"))

    with pytest.raises(SendError) as exc_info:
        MessageDispatcher(transport).send(SendRequest("1", "x" * 200))

    assert exc_info.value.message == "generic failure"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
