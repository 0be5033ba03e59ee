from .models import MESSAGE_TYPE_RECEIVED, MESSAGE_TYPE_SENT, MessageRecord
from .normalizer import COLUMNS, normalize_row, normalize_rows

__all__ = [
    "MESSAGE_TYPE_RECEIVED",
    "MESSAGE_TYPE_SENT",
    "MessageRecord",
    "COLUMNS",
    "normalize_row",
    "normalize_rows",
]
