from __future__ import annotations

import platform
import sys

from smsbridge.config import Settings
from smsbridge.core.db import MIGRATIONS_DIR, connect_db, pending_migrations
from smsbridge.core.permissions import StaticAuthorizationGate


def run_doctor_checks(settings: Settings) -> list[dict[str, str]]:
    checks: list[dict[str, str]] = []

    checks.append(
        {
            "check": "python_version",
            "status": "ok" if sys.version_info >= (3, 11) else "warn",
            "detail": platform.python_version(),
        }
    )

    if settings.db_path.exists():
        connection = connect_db(settings.db_path)
        try:
            pending = pending_migrations(connection, MIGRATIONS_DIR)
        finally:
            connection.close()
        checks.append(
            {
                "check": "db_schema",
                "status": "warn" if pending else "ok",
                "detail": f"pending: {', '.join(p.name for p in pending)}" if pending else str(settings.db_path),
            }
        )
    else:
        checks.append(
            {
                "check": "db_schema",
                "status": "warn",
                "detail": f"Нет базы {settings.db_path}, запустите init",
            }
        )

    try:
        StaticAuthorizationGate.from_names(settings.granted_capabilities)
        checks.append(
            {
                "check": "capabilities",
                "status": "ok" if settings.granted_capabilities else "warn",
                "detail": ",".join(settings.granted_capabilities) or "ничего не разрешено",
            }
        )
    except ValueError as exc:
        checks.append({"check": "capabilities", "status": "error", "detail": str(exc)})

    if settings.transport == "twilio":
        checks.append(
            {
                "check": "transport_twilio",
                "status": "ok" if settings.twilio else "error",
                "detail": settings.twilio.from_number if settings.twilio else "TWILIO_* ключи не заданы",
            }
        )
    else:
        checks.append({"check": "transport_outbox", "status": "ok", "detail": str(settings.db_path)})

    checks.append(
        {
            "check": "single_segment_limit",
            "status": "ok" if settings.single_segment_limit > 0 else "error",
            "detail": str(settings.single_segment_limit),
        }
    )

    return checks
