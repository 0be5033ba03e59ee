from __future__ import annotations

import json
import re
from dataclasses import dataclass

SMS_KEYWORDS = [
    "sms",
    "text message",
    "text messages",
    "send a text",
    "send text",
    "send sms",
    "my texts",
    "my text",
    "recent texts",
    "recent text",
    "read my texts",
    "read my messages",
    "check my texts",
    "check my messages",
    "who texted",
    "who messaged",
    "unread texts",
    "unread text",
    "reply to text",
    "respond to text",
    "text back",
]

ACTION_RE = re.compile(r"\[ACTION:SEND_SMS\]([\s\S]*?)\[/ACTION\]")


@dataclass(frozen=True, slots=True)
class SmsAction:
    to: str
    body: str


@dataclass(frozen=True, slots=True)
class ParsedResponse:
    display_text: str
    sms_action: SmsAction | None = None


def is_sms_related(text: str, keywords: list[str] | None = None) -> bool:
    lower = text.lower()
    return any(keyword in lower for keyword in (keywords or SMS_KEYWORDS))


def parse_response_for_actions(response_text: str) -> ParsedResponse:
    """
    Ищет первый блок [ACTION:SEND_SMS]{"to": ..., "body": ...}[/ACTION].
    Битый JSON - текст возвращается как есть, без действия.
    """
    match = ACTION_RE.search(response_text)
    if not match:
        return ParsedResponse(display_text=response_text)

    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError:
        return ParsedResponse(display_text=response_text)
    if not isinstance(payload, dict):
        return ParsedResponse(display_text=response_text)

    display_text = ACTION_RE.sub("", response_text, count=1).strip()
    return ParsedResponse(
        display_text=display_text,
        sms_action=SmsAction(to=str(payload.get("to") or ""), body=str(payload.get("body") or "")),
    )
