from __future__ import annotations

from pathlib import Path

import pandas as pd

from smsbridge.core.normalize import MessageRecord

EXPORT_COLUMNS = ["id", "address", "body", "date", "type", "read"]


def export_messages(messages: list[MessageRecord], formats: list[str], out_dir: Path) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([message.to_dict() for message in messages], columns=EXPORT_COLUMNS)
    df["datetime_utc"] = pd.to_datetime(df["date"], unit="ms", utc=True)

    created_files: list[Path] = []
    if "csv" in formats:
        csv_path = (out_dir / "sms_export.csv").resolve()
        df.to_csv(csv_path, index=False, encoding="utf-8-sig")
        created_files.append(csv_path)

    if "xlsx" in formats:
        xlsx_path = (out_dir / "sms_export.xlsx").resolve()
        # Excel не принимает datetime с таймзоной
        df["datetime_utc"] = df["datetime_utc"].dt.tz_localize(None)
        with pd.ExcelWriter(xlsx_path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="messages")
        created_files.append(xlsx_path)

    return created_files
