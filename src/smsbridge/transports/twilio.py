from __future__ import annotations

from typing import Sequence

import requests

from smsbridge.config import TwilioConfig
from smsbridge.core.dispatch.segments import divide_message
from smsbridge.core.errors import TransportError

API_BASE_URL = "https://api.twilio.com/2010-04-01"


class TwilioTransport:
    def __init__(self, config: TwilioConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return "twilio"

    @property
    def messages_url(self) -> str:
        return f"{API_BASE_URL}/Accounts/{self.config.account_sid}/Messages.json"

    def divide_message(self, body: str) -> list[str]:
        return divide_message(body)

    def _post(self, address: str, body: str) -> None:
        try:
            response = self.session.post(
                self.messages_url,
                auth=(self.config.account_sid, self.config.auth_token),
                data={"From": self.config.from_number, "To": address, "Body": body},
                timeout=self.config.timeout_sec,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Twilio request failed: {exc}") from exc

        if response.status_code != 201:
            raise TransportError(f"Twilio error {response.status_code}: {response.text}")

    def send_text(self, address: str, body: str) -> None:
        self._post(address, body)

    def send_multipart(self, address: str, parts: Sequence[str]) -> None:
        # Twilio сам склеивает части на стороне получателя: один запрос на все сообщение
        self._post(address, "".join(parts))
