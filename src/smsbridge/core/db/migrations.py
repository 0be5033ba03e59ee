from __future__ import annotations

import sqlite3
from pathlib import Path

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def connect_db(db_path: Path, timeout_sec: float = 5.0) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    # Соединение может использоваться из asyncio.to_thread
    connection = sqlite3.connect(str(db_path), timeout=timeout_sec, check_same_thread=False)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")
    return connection


def _ensure_migrations_table(connection: sqlite3.Connection) -> None:
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            filename TEXT PRIMARY KEY,
            applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    connection.commit()


def pending_migrations(connection: sqlite3.Connection, migrations_dir: Path) -> list[Path]:
    _ensure_migrations_table(connection)
    applied_files = {
        row["filename"] for row in connection.execute("SELECT filename FROM schema_migrations")
    }
    return [path for path in sorted(migrations_dir.glob("*.sql")) if path.name not in applied_files]


def apply_migrations(connection: sqlite3.Connection, migrations_dir: Path) -> list[str]:
    executed: list[str] = []

    for migration_file in pending_migrations(connection, migrations_dir):
        script = migration_file.read_text(encoding="utf-8")
        with connection:
            connection.executescript(script)
            connection.execute(
                "INSERT INTO schema_migrations (filename) VALUES (?)",
                (migration_file.name,),
            )
        executed.append(migration_file.name)

    return executed
