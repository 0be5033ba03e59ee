from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from smsbridge.core.errors import ProviderError
from smsbridge.core.normalize import COLUMNS, MESSAGE_TYPE_RECEIVED, MESSAGE_TYPE_SENT
from smsbridge.core.query import Box, QuerySpec

from .migrations import MIGRATIONS_DIR, apply_migrations, connect_db

# Коллекция -> условие по type; None означает объединенную коллекцию
COLLECTION_CLAUSES: dict[Box, str | None] = {
    Box.INBOX: f"type = {MESSAGE_TYPE_RECEIVED}",
    Box.SENT: f"type = {MESSAGE_TYPE_SENT}",
    Box.ALL: None,
}


class MessageRepository:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.connection = connect_db(db_path)
        self._write_lock = threading.Lock()

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> MessageRepository:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def migrate(self) -> list[str]:
        return apply_migrations(self.connection, MIGRATIONS_DIR)

    def _fetch_id(self, query: str, params: tuple[Any, ...]) -> int:
        row = self.connection.execute(query, params).fetchone()
        if row is None:
            raise RuntimeError(f"Не найден идентификатор по запросу: {query}")
        return int(row["id"])

    @staticmethod
    def build_select(spec: QuerySpec) -> tuple[str, tuple[Any, ...]]:
        clauses: list[str] = []
        collection_clause = COLLECTION_CLAUSES[spec.collection]
        if collection_clause:
            clauses.append(collection_clause)
        if spec.selection:
            clauses.append(spec.selection)

        sql = f"SELECT {', '.join(COLUMNS)} FROM sms"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += f" ORDER BY {spec.order_by} LIMIT ?"
        return sql, (*spec.selection_args, spec.limit)

    def _table_exists(self, connection: sqlite3.Connection) -> bool:
        row = connection.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'sms'"
        ).fetchone()
        return row is not None

    @contextmanager
    def open_cursor(self, spec: QuerySpec) -> Iterator[sqlite3.Cursor | None]:
        """
        Курсор живет ровно один вызов: отдельное соединение, закрывается на любом выходе.
        Если хранилище недоступно (нет файла или таблицы) - отдаем None вместо курсора.
        """
        if not self.db_path.exists():
            yield None
            return

        sql, params = self.build_select(spec)
        try:
            connection = connect_db(self.db_path)
        except sqlite3.Error as exc:
            raise ProviderError(f"Не удалось открыть хранилище: {exc}") from exc

        cursor: sqlite3.Cursor | None = None
        try:
            if self._table_exists(connection):
                try:
                    cursor = connection.execute(sql, params)
                except sqlite3.Error as exc:
                    raise ProviderError(str(exc)) from exc
            yield cursor
        finally:
            try:
                if cursor is not None:
                    cursor.close()
            finally:
                connection.close()

    def insert_message(
        self,
        address: str | None,
        body: str | None,
        date: int,
        message_type: int = MESSAGE_TYPE_RECEIVED,
        read: bool = False,
        thread_id: str | None = None,
        external_id: str | None = None,
    ) -> int:
        with self._write_lock, self.connection:
            cursor = self.connection.execute(
                """
                INSERT INTO sms (external_id, thread_id, address, body, date, type, read)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(external_id) DO UPDATE SET
                    thread_id = COALESCE(excluded.thread_id, sms.thread_id),
                    address = COALESCE(excluded.address, sms.address),
                    body = COALESCE(excluded.body, sms.body),
                    date = excluded.date,
                    type = excluded.type,
                    read = excluded.read
                """,
                (external_id, thread_id, address, body, int(date), int(message_type), 1 if read else 0),
            )
            if external_id is None:
                return int(cursor.lastrowid)
        return self._fetch_id("SELECT id FROM sms WHERE external_id = ?", (external_id,))

    def count_messages(self, box: Box = Box.ALL) -> int:
        sql = "SELECT COUNT(*) AS cnt FROM sms"
        collection_clause = COLLECTION_CLAUSES[box]
        if collection_clause:
            sql += f" WHERE {collection_clause}"
        return int(self.connection.execute(sql).fetchone()["cnt"])
