from .context import format_messages_for_context
from .doctor import run_doctor_checks
from .exporter import export_messages
from .sms import OperationState, SmsService, create_sms_service

__all__ = [
    "OperationState",
    "SmsService",
    "create_sms_service",
    "export_messages",
    "format_messages_for_context",
    "run_doctor_checks",
]
