from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smsbridge.core.errors import SendError, TransportError

from .models import SendRequest, SendResult
from .segments import LengthThresholdPolicy, SegmentPolicy

if TYPE_CHECKING:
    from smsbridge.transports.base import Transport


class MessageDispatcher:
    def __init__(
        self,
        transport: Transport,
        policy: SegmentPolicy | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.transport = transport
        self.policy = policy or LengthThresholdPolicy()
        self.logger = logger or logging.getLogger(__name__)

    def send(self, request: SendRequest) -> SendResult:
        try:
            if self.policy.fits_single(request.body):
                self.transport.send_text(request.address, request.body)
                segments = 1
            else:
                parts = list(self.transport.divide_message(request.body))
                self.transport.send_multipart(request.address, parts)
                segments = len(parts)
        except TransportError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise SendError(str(exc) or exc.__class__.__name__) from exc

        self.logger.info(
            "Dispatched via %s: segments=%s length=%s", self.transport.name, segments, len(request.body)
        )
        return SendResult(success=True, message=f"SMS sent to {request.address}", segments=segments)
