from __future__ import annotations

import json
import subprocess
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, NoReturn

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from smsbridge.config import Settings
from smsbridge.core.db import MessageRepository
from smsbridge.core.logging import configure_logging, get_logger
from smsbridge.core.normalize import MessageRecord
from smsbridge.core.query import Box
from smsbridge.core.result import Err
from smsbridge.parsers import load_messages_json, parse_response_for_actions
from smsbridge.services import (
    SmsService,
    create_sms_service,
    export_messages,
    format_messages_for_context,
    run_doctor_checks,
)

app = typer.Typer(no_args_is_help=True, help="smsbridge CLI: чтение и отправка SMS через хранилище сообщений")

BOX_VALUES = [box.value for box in Box]
BOX_HELP = f"Папка: {', '.join(BOX_VALUES)} (прочее = inbox)"


def _load_settings(base_dir: Path | None = None) -> Settings:
    settings = Settings.load(base_dir=base_dir)
    settings.ensure_directories()
    return settings


@contextmanager
def _service_session(operation: str) -> Iterator[tuple[Settings, MessageRepository, SmsService]]:
    correlation_id = uuid.uuid4().hex
    settings = _load_settings()
    configure_logging(settings.logs_dir, correlation_id=correlation_id)
    logger = get_logger(f"smsbridge.{operation}", correlation_id, operation=operation)

    with MessageRepository(settings.db_path) as repository:
        repository.migrate()
        yield settings, repository, create_sms_service(settings, repository, logger)


def _fail(error: Err) -> NoReturn:
    print(f"[red]{error.code.value}[/red]: {error.message}")
    raise typer.Exit(1)


def _filter_mapping(box: str, search: str | None, address: str | None) -> dict[str, str | None]:
    # Неизвестная папка читается как inbox, как и в MessageFilter.from_mapping
    return {"box": box, "search": search, "address": address}


def _fetch(
    service: SmsService,
    box: str,
    search: str | None,
    address: str | None,
    count: int | None,
) -> list[MessageRecord]:
    result = service.get_messages(_filter_mapping(box, search, address), count)
    if isinstance(result, Err):
        _fail(result)
    return result.value


def _render_table(messages: list[MessageRecord]) -> Table:
    table = Table(show_lines=False)
    for column in ["id", "dir", "address", "date", "read", "body"]:
        table.add_column(column)
    for message in messages:
        table.add_row(
            message.id,
            "←" if message.is_received else "→",
            message.address,
            datetime.fromtimestamp(message.date / 1000).strftime("%Y-%m-%d %H:%M"),
            "" if message.read else "•",
            message.body,
        )
    return table


@app.command("init")
def init_command(
    base_dir: Path | None = typer.Option(None, help="Корень проекта (по умолчанию текущая папка)"),
) -> None:
    settings = _load_settings(base_dir=base_dir)
    with MessageRepository(settings.db_path) as repository:
        executed = repository.migrate()
    print(f"[green]Инициализация завершена[/green]. DB: {settings.db_path}")
    print(f"Миграции: {executed if executed else 'нет новых'}")


@app.command("messages")
def messages_command(
    box: str = typer.Option("inbox", help=BOX_HELP),
    search: str | None = typer.Option(None, help="Подстрока в тексте сообщения"),
    address: str | None = typer.Option(None, help="Подстрока в номере отправителя/получателя"),
    count: int | None = typer.Option(None, help="Сколько сообщений вернуть (1..100)"),
    as_json: bool = typer.Option(False, "--json", help="Вывести JSON вместо таблицы"),
) -> None:
    with _service_session("messages") as (_, _, service):
        messages = _fetch(service, box, search, address, count)

    if as_json:
        typer.echo(json.dumps([m.to_dict() for m in messages], ensure_ascii=False, indent=2))
        return
    Console().print(_render_table(messages))


@app.command("send")
def send_command(
    address: str = typer.Argument(..., help="Номер получателя"),
    body: str = typer.Argument(..., help="Текст сообщения"),
) -> None:
    with _service_session("send") as (_, _, service):
        result = service.send_message(address, body)

    if isinstance(result, Err):
        _fail(result)
    print(f"[green]{result.value.message}[/green] (частей: {result.value.segments})")


@app.command("context")
def context_command(
    box: str = typer.Option("all", help=BOX_HELP),
    search: str | None = typer.Option(None, help="Подстрока в тексте сообщения"),
    address: str | None = typer.Option(None, help="Подстрока в номере"),
    count: int | None = typer.Option(None, help="Сколько сообщений включить"),
) -> None:
    with _service_session("context") as (_, _, service):
        messages = _fetch(service, box, search, address, count)
    typer.echo(format_messages_for_context(messages))


@app.command("act")
def act_command(
    response: str = typer.Argument(..., help="Ответ ассистента с блоком ACTION:SEND_SMS"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Только показать действие"),
) -> None:
    parsed = parse_response_for_actions(response)
    typer.echo(parsed.display_text)
    if parsed.sms_action is None:
        print("[yellow]Действие SEND_SMS не найдено[/yellow]")
        return

    action = parsed.sms_action
    print(f"SEND_SMS -> {action.to}: {action.body}")
    if dry_run:
        return

    with _service_session("act") as (_, _, service):
        result = service.send_message(action.to, action.body)
    if isinstance(result, Err):
        _fail(result)
    print(f"[green]{result.value.message}[/green]")


@app.command("import-json")
def import_json_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON со списком сообщений"),
) -> None:
    messages = load_messages_json(path)
    with _service_session("import") as (_, repository, _):
        for message in messages:
            repository.insert_message(
                address=message.address,
                body=message.body,
                date=message.date,
                message_type=message.type,
                read=message.read,
                thread_id=message.thread_id,
                external_id=message.external_id,
            )
        total = repository.count_messages()
    print(f"[green]Импорт завершен[/green]: {len(messages)} сообщений, всего в базе: {total}")


@app.command("export")
def export_command(
    format: str = typer.Option("xlsx,csv", help="Список форматов через запятую: xlsx,csv"),
    out: Path | None = typer.Option(None, help="Папка экспорта"),
    box: str = typer.Option("all", help=BOX_HELP),
    search: str | None = typer.Option(None, help="Подстрока в тексте сообщения"),
    address: str | None = typer.Option(None, help="Подстрока в номере"),
    count: int = typer.Option(100, help="Сколько сообщений выгрузить (1..100)"),
) -> None:
    formats = [item.strip().lower() for item in format.split(",") if item.strip()]
    supported = {"xlsx", "csv"}
    unknown = [item for item in formats if item not in supported]
    if unknown:
        raise typer.BadParameter(f"Неподдерживаемые форматы: {unknown}")

    with _service_session("export") as (settings, _, service):
        messages = _fetch(service, box, search, address, count)
        files = export_messages(messages, formats=formats, out_dir=(out or settings.exports_dir).resolve())

    print("[green]Экспорт завершен[/green]")
    for file_path in files:
        print(f"- {file_path}")


@app.command("doctor")
def doctor_command() -> None:
    settings = _load_settings()
    checks = run_doctor_checks(settings)

    print("Результаты doctor:")
    for check in checks:
        status = check["status"].upper()
        print(f"- [{status}] {check['check']}: {check['detail']}")


@app.command("tests")
def tests_command() -> None:
    result = subprocess.run([sys.executable, "-m", "pytest", "-q"], check=False)
    if result.returncode != 0:
        raise typer.Exit(result.returncode)
    print("[green]Тесты прошли успешно[/green]")


if __name__ == "__main__":
    app()
