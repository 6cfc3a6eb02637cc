#!/usr/bin/env python3
"""
タスク管理CLI - サービス層を直接呼び出すコマンドラインインターフェース

Usage:
    python -m src.tasks list [--format json|text]
    python -m src.tasks add --title "タイトル" [--description "詳細"]
    python -m src.tasks update --id ID [--title "新タイトル"] [--description "新詳細"] [--clear-description] [--completed true|false]
    python -m src.tasks complete --id ID
    python -m src.tasks reopen --id ID
    python -m src.tasks delete --id ID
    python -m src.tasks get --id ID [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from src.task_tracker.config import Config

from .exceptions import TaskNotFoundError, TaskValidationError
from .models import Task
from .repository import TaskRepository, UNSET
from .service import TaskService


def format_task_text(task: Task) -> str:
    """タスクをテキスト形式で整形"""
    mark = "x" if task.completed else " "
    description = (task.description or "").strip() or "説明なし"
    return f"[{task.id}] [{mark}] {task.title} | {description}"


def _print_task(task: Task, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(task.to_dict(), ensure_ascii=False))
    else:
        print(f"{prefix}{format_task_text(task)}")


def cmd_list(service: TaskService, output_format: str) -> int:
    """タスク一覧を表示"""
    items = service.list()
    if output_format == "json":
        print(json.dumps([item.to_dict() for item in items], ensure_ascii=False))
    else:
        if not items:
            print("タスクは登録されていません。")
        else:
            for item in items:
                print(format_task_text(item))
            done = sum(1 for item in items if item.completed)
            print(f"{done}/{len(items)} completed")
    return 0


def cmd_add(
    service: TaskService,
    title: str,
    description: Optional[str],
    output_format: str,
) -> int:
    """新しいタスクを追加"""
    try:
        created = service.create(title, description or None)
    except TaskValidationError:
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1
    _print_task(created, output_format, prefix="追加しました: ")
    return 0


def cmd_update(
    service: TaskService,
    task_id: int,
    title: Optional[str],
    description: Optional[str],
    clear_description: bool,
    completed: Optional[bool],
    output_format: str,
) -> int:
    """既存のタスクを更新"""
    description_value: Any = UNSET
    if clear_description:
        description_value = None
    elif description is not None:
        description_value = description

    try:
        updated = service.update(
            task_id,
            title=title,
            description=description_value,
            completed=completed,
        )
    except TaskValidationError:
        print("Error: タイトルを空にすることはできません。", file=sys.stderr)
        return 1
    except TaskNotFoundError:
        print(f"Error: ID {task_id} のタスクが見つかりません。", file=sys.stderr)
        return 1
    _print_task(updated, output_format, prefix="更新しました: ")
    return 0


def cmd_set_completed(
    service: TaskService, task_id: int, completed: bool, output_format: str
) -> int:
    """タスクの完了状態を切り替える"""
    try:
        updated = service.update(task_id, completed=completed)
    except TaskNotFoundError:
        print(f"Error: ID {task_id} のタスクが見つかりません。", file=sys.stderr)
        return 1
    _print_task(updated, output_format, prefix="完了しました: " if completed else "未完了に戻しました: ")
    return 0


def cmd_delete(service: TaskService, task_id: int, output_format: str) -> int:
    """タスクを削除（存在しないIDはエラーではない）"""
    deleted = service.delete(task_id)
    if output_format == "json":
        print(json.dumps({"success": deleted, "id": task_id}, ensure_ascii=False))
    elif deleted:
        print(f"削除しました: ID {task_id}")
    else:
        print(f"ID {task_id} のタスクは存在しませんでした。")
    return 0


def cmd_get(service: TaskService, task_id: int, output_format: str) -> int:
    """特定のタスクを取得"""
    try:
        task = service.get(task_id)
    except TaskNotFoundError:
        print(f"Error: ID {task_id} のタスクが見つかりません。", file=sys.stderr)
        return 1
    _print_task(task, output_format)
    return 0


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"true/falseを指定してください: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="タスク管理CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: 設定ファイルの database.path）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    def add_format(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )

    parser_list = subparsers.add_parser("list", help="タスク一覧を表示")
    add_format(parser_list)

    parser_add = subparsers.add_parser("add", help="新しいタスクを追加")
    parser_add.add_argument("--title", required=True, help="タスクのタイトル")
    parser_add.add_argument("--description", default=None, help="タスクの詳細説明")
    add_format(parser_add)

    parser_update = subparsers.add_parser("update", help="既存のタスクを更新")
    parser_update.add_argument("--id", type=int, required=True, help="更新するタスクのID")
    parser_update.add_argument("--title", help="新しいタイトル")
    parser_update.add_argument("--description", help="新しい詳細説明")
    parser_update.add_argument("--clear-description", action="store_true", help="詳細説明をクリア")
    parser_update.add_argument("--completed", type=_parse_bool, help="完了状態 (true|false)")
    add_format(parser_update)

    for name, help_text in (("complete", "タスクを完了にする"), ("reopen", "タスクを未完了に戻す")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", type=int, required=True, help="対象タスクのID")
        add_format(sub)

    parser_delete = subparsers.add_parser("delete", help="タスクを削除")
    parser_delete.add_argument("--id", type=int, required=True, help="削除するタスクのID")
    add_format(parser_delete)

    parser_get = subparsers.add_parser("get", help="特定のタスクを取得")
    parser_get.add_argument("--id", type=int, required=True, help="取得するタスクのID")
    add_format(parser_get)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    config = Config.from_yaml()
    db_path = args.db_path or config.resolve_database_path()
    service = TaskService(TaskRepository(db_path, list_order=config.tasks.list_order))

    if args.command == "list":
        return cmd_list(service, args.format)
    elif args.command == "add":
        return cmd_add(service, args.title, args.description, args.format)
    elif args.command == "update":
        return cmd_update(
            service,
            args.id,
            args.title,
            args.description,
            args.clear_description,
            args.completed,
            args.format,
        )
    elif args.command == "complete":
        return cmd_set_completed(service, args.id, True, args.format)
    elif args.command == "reopen":
        return cmd_set_completed(service, args.id, False, args.format)
    elif args.command == "delete":
        return cmd_delete(service, args.id, args.format)
    elif args.command == "get":
        return cmd_get(service, args.id, args.format)
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
