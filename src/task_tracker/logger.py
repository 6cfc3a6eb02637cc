"""
ロギング設定モジュール

サーバー・CUIクライアント共通のロガー初期化を提供します。
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = "logs/task_tracker.log",
    console: bool = True,
) -> None:
    """
    ロガーのセットアップ

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス（Noneならファイル出力なし）
        console: 標準エラーにも出力するか
    """
    handlers: List[logging.Handler] = []
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    if console or not handlers:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    # uvicornのアクセスログはアプリのログレベルに揃える
    logging.getLogger("uvicorn.access").setLevel(getattr(logging, log_level.upper()))
