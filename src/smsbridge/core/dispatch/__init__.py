from .dispatcher import MessageDispatcher
from .models import SendRequest, SendResult
from .segments import (
    EncodingAwarePolicy,
    LengthThresholdPolicy,
    SegmentPolicy,
    SmsEncoding,
    detect_encoding,
    divide_message,
    message_units,
    utf16_length,
)

__all__ = [
    "MessageDispatcher",
    "SendRequest",
    "SendResult",
    "SegmentPolicy",
    "LengthThresholdPolicy",
    "EncodingAwarePolicy",
    "SmsEncoding",
    "detect_encoding",
    "divide_message",
    "message_units",
    "utf16_length",
]
