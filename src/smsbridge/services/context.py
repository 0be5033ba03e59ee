from __future__ import annotations

from datetime import datetime, tzinfo

from smsbridge.core.normalize import MessageRecord

CONTEXT_OPEN = "[SMS_CONTEXT]"
CONTEXT_CLOSE = "[/SMS_CONTEXT]"
ENTRY_SEPARATOR = "\n---\n"


def _format_date(epoch_ms: int, tz: tzinfo | None) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=tz)
    if tz is None:
        moment = moment.astimezone()
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def format_message_entry(message: MessageRecord, tz: tzinfo | None = None) -> str:
    direction = "FROM" if message.is_received else "TO"
    unread = " [UNREAD]" if message.is_received and not message.read else ""
    return f"{direction}: {message.address} | {_format_date(message.date, tz)}{unread}\n{message.body}"


def format_messages_for_context(messages: list[MessageRecord], tz: tzinfo | None = None) -> str:
    """Блок для подстановки в промпт ассистента; пустой список - пустая строка."""
    if not messages:
        return ""
    entries = ENTRY_SEPARATOR.join(format_message_entry(message, tz) for message in messages)
    return (
        f"{CONTEXT_OPEN}\n"
        f"Recent text messages from this phone ({len(messages)} messages):\n\n"
        f"{entries}\n"
        f"{CONTEXT_CLOSE}"
    )
