from .base import Transport
from .outbox import OutboxTransport
from .twilio import TwilioTransport

__all__ = ["Transport", "OutboxTransport", "TwilioTransport"]
