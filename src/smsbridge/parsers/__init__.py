from .actions import SMS_KEYWORDS, ParsedResponse, SmsAction, is_sms_related, parse_response_for_actions
from .import_rows import ImportedMessage, load_messages_json

__all__ = [
    "SMS_KEYWORDS",
    "ParsedResponse",
    "SmsAction",
    "is_sms_related",
    "parse_response_for_actions",
    "ImportedMessage",
    "load_messages_json",
]
