#!/usr/bin/env python3
"""
タスク一覧のCUIクライアント

APIサーバーに接続し、標準入力からのコマンドでタスクを操作します。

使用例:
    python -m src.client
    python -m src.client --api-url http://localhost:8000

コマンド:
    ls                          一覧を再取得して表示
    add タイトル [| 詳細]        タスクを追加
    done ID                     完了/未完了を切り替え
    edit ID タイトル [| 詳細]    タイトルと詳細を変更
    rm ID                       タスクを削除
    quit                        終了
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

from src.task_tracker.config import Config
from src.task_tracker.logger import setup_logger

from .api_client import TaskApiClient
from .view import TaskListView

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """コマンドライン引数をパース"""
    parser = argparse.ArgumentParser(
        description="タスク一覧のCUIクライアント",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--api-url", type=str, default=None, help="APIサーバーのURL")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="ログレベル（デフォルト: WARNING）",
    )
    return parser.parse_args(argv)


def _split_text(text: str) -> Tuple[str, Optional[str]]:
    """'タイトル | 詳細' を分割"""
    title, sep, description = text.partition("|")
    return title.strip(), (description.strip() or None) if sep else None


def _parse_id(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        print(f"IDは整数で指定してください: {value}")
        return None


def _report(view: TaskListView, ok: bool) -> None:
    if ok:
        print("\n".join(view.render()))
    elif view.last_error is not None:
        print(f"エラー: {view.last_error}")
    else:
        print("何も変更されませんでした。")


def handle_command(view: TaskListView, line: str) -> bool:
    """1行分のコマンドを処理する。終了する場合はFalseを返す"""
    command, _, rest = line.strip().partition(" ")
    command = command.lower()
    rest = rest.strip()

    if not command:
        return True
    if command in EXIT_COMMANDS:
        return False

    if command == "ls":
        _report(view, view.load())
    elif command == "add":
        title, description = _split_text(rest)
        _report(view, view.add(title, description) is not None)
    elif command in ("done", "rm", "edit"):
        id_text, _, text = rest.partition(" ")
        task_id = _parse_id(id_text)
        if task_id is None:
            return True
        if command == "done":
            _report(view, view.toggle(task_id) is not None)
        elif command == "rm":
            _report(view, view.remove(task_id))
        else:
            title, description = _split_text(text)
            _report(view, view.edit(task_id, title, description) is not None)
    else:
        print(f"不明なコマンド: {command}（ls, add, done, edit, rm, quit）")
    return True


def main(argv: Optional[list[str]] = None) -> int:
    """メイン処理"""
    args = parse_args(argv)
    config = Config.from_yaml()
    # 対話画面を汚さないようログはファイルのみに出力
    setup_logger(log_level=args.log_level, log_file=str(config.resolve_log_file()), console=False)

    client = TaskApiClient(
        api_url=args.api_url or config.client.api_url,
        timeout=config.client.timeout_seconds,
    )
    view = TaskListView(client)
    logger.info("Connecting to %s", client.api_url)
    _report(view, view.load())

    while True:
        try:
            line = input("tasks> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not handle_command(view, line):
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
