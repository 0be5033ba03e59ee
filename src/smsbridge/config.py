from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_GRANTED_CAPABILITIES = ["read", "send"]
DEFAULT_SINGLE_SEGMENT_LIMIT = 160
DEFAULT_MESSAGE_COUNT = 20
TRANSPORT_VALUES = {"outbox", "twilio"}


@dataclass(slots=True)
class TwilioConfig:
    account_sid: str
    auth_token: str
    from_number: str
    timeout_sec: float = 30.0


@dataclass(slots=True)
class Settings:
    root_dir: Path
    data_dir: Path
    db_path: Path
    logs_dir: Path
    exports_dir: Path
    granted_capabilities: list[str] = field(default_factory=lambda: DEFAULT_GRANTED_CAPABILITIES.copy())
    single_segment_limit: int = DEFAULT_SINGLE_SEGMENT_LIMIT
    default_count: int = DEFAULT_MESSAGE_COUNT
    transport: str = "outbox"
    twilio: TwilioConfig | None = None

    @classmethod
    def load(cls, base_dir: Path | None = None) -> Settings:
        load_dotenv(override=False)

        root_env = os.getenv("SMSBRIDGE_HOME")
        root_dir = Path(root_env).expanduser().resolve() if root_env else (base_dir or Path.cwd()).resolve()

        data_dir = Path(os.getenv("SMSBRIDGE_DATA_DIR", root_dir / "data")).expanduser().resolve()
        db_path = Path(os.getenv("SMSBRIDGE_DB_PATH", data_dir / "sms.sqlite3")).expanduser().resolve()
        logs_dir = Path(os.getenv("SMSBRIDGE_LOG_DIR", root_dir / "logs")).expanduser().resolve()
        exports_dir = Path(os.getenv("SMSBRIDGE_EXPORT_DIR", root_dir / "exports")).expanduser().resolve()

        capabilities_env = os.getenv("SMSBRIDGE_GRANTED_CAPABILITIES")
        if capabilities_env is not None:
            granted_capabilities = [c.strip().lower() for c in capabilities_env.split(",") if c.strip()]
        else:
            granted_capabilities = DEFAULT_GRANTED_CAPABILITIES.copy()

        single_segment_limit = int(
            os.getenv("SMSBRIDGE_SINGLE_SEGMENT_LIMIT", str(DEFAULT_SINGLE_SEGMENT_LIMIT))
        )
        default_count = int(os.getenv("SMSBRIDGE_DEFAULT_COUNT", str(DEFAULT_MESSAGE_COUNT)))

        transport = os.getenv("SMSBRIDGE_TRANSPORT", "outbox").strip().lower()
        if transport not in TRANSPORT_VALUES:
            raise ValueError(f"Unsupported SMSBRIDGE_TRANSPORT: {transport}")

        return cls(
            root_dir=root_dir,
            data_dir=data_dir,
            db_path=db_path,
            logs_dir=logs_dir,
            exports_dir=exports_dir,
            granted_capabilities=granted_capabilities,
            single_segment_limit=single_segment_limit,
            default_count=default_count,
            transport=transport,
            twilio=cls._load_twilio_config(),
        )

    @staticmethod
    def _load_twilio_config() -> TwilioConfig | None:
        """
        Twilio включается только если заданы все три ключа:
        TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN / TWILIO_FROM_NUMBER.
        """
        account_sid = os.getenv("TWILIO_ACCOUNT_SID")
        auth_token = os.getenv("TWILIO_AUTH_TOKEN")
        from_number = os.getenv("TWILIO_FROM_NUMBER")
        if not account_sid or not auth_token or not from_number:
            return None
        return TwilioConfig(
            account_sid=account_sid,
            auth_token=auth_token,
            from_number=from_number,
            timeout_sec=float(os.getenv("TWILIO_TIMEOUT_SEC", "30")),
        )

    def ensure_directories(self) -> None:
        for path in [self.root_dir, self.data_dir, self.logs_dir, self.exports_dir]:
            path.mkdir(parents=True, exist_ok=True)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
