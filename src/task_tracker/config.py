"""
設定管理モジュール

関連クラス:
  - tasks.repository.TaskRepository: データベースパス・並び順を使用
  - server.dependencies: サーバー起動時にこの設定を読み込む
  - client.api_client.TaskApiClient: APIのURL・タイムアウトを使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"

# データベースパスを上書きする環境変数
DB_PATH_ENV = "TASK_TRACKER_DB_PATH"

LIST_ORDERS = ("asc", "desc")


@dataclass
class DatabaseConfig:
    """SQLite設定"""

    path: str = "data/tasks.db"


@dataclass
class ServerConfig:
    """APIサーバー設定"""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@dataclass
class ClientConfig:
    """HTTPクライアント設定"""

    api_url: str = "http://localhost:8000"
    timeout_seconds: float = 10.0


@dataclass
class TaskListConfig:
    """タスク一覧設定"""

    list_order: str = "asc"  # asc | desc (id順)


@dataclass
class Config:
    """アプリケーション設定クラス"""

    database: DatabaseConfig = None  # type: ignore
    server: ServerConfig = None  # type: ignore
    client: ClientConfig = None  # type: ignore
    tasks: TaskListConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/task_tracker.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.database is None:
            self.database = DatabaseConfig()
        if self.server is None:
            self.server = ServerConfig()
        if self.client is None:
            self.client = ClientConfig()
        if self.tasks is None:
            self.tasks = TaskListConfig()
        if self.tasks.list_order not in LIST_ORDERS:
            raise ValueError(
                f"tasks.list_order must be one of {LIST_ORDERS}, got {self.tasks.list_order!r}"
            )

    def resolve_database_path(self) -> Path:
        """環境変数 > 設定ファイルの順でDBパスを決定する"""
        return _from_project_root(os.getenv(DB_PATH_ENV) or self.database.path)

    def resolve_log_file(self) -> Path:
        """ログファイルのパス（相対パスはプロジェクトルート基準）"""
        return _from_project_root(self.log_file)

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        db_data = yaml_data.get("database", {})
        server_data = yaml_data.get("server", {})
        client_data = yaml_data.get("client", {})
        tasks_data = yaml_data.get("tasks", {})
        log_data = yaml_data.get("log", {})

        return cls(
            database=DatabaseConfig(path=db_data.get("path", "data/tasks.db")),
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 8000)),
                reload=bool(server_data.get("reload", False)),
            ),
            client=ClientConfig(
                api_url=client_data.get("api_url", "http://localhost:8000"),
                timeout_seconds=float(client_data.get("timeout_seconds", 10)),
            ),
            tasks=TaskListConfig(list_order=tasks_data.get("list_order", "asc")),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/task_tracker.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            database=DatabaseConfig(path=os.getenv(DB_PATH_ENV, "data/tasks.db")),
            server=ServerConfig(
                host=os.getenv("TASK_TRACKER_HOST", "0.0.0.0"),
                port=int(os.getenv("TASK_TRACKER_PORT", "8000")),
                reload=os.getenv("TASK_TRACKER_RELOAD", "false").lower() == "true",
            ),
            client=ClientConfig(
                api_url=os.getenv("TASK_TRACKER_API_URL", "http://localhost:8000"),
                timeout_seconds=float(os.getenv("TASK_TRACKER_TIMEOUT", "10")),
            ),
            tasks=TaskListConfig(list_order=os.getenv("TASK_TRACKER_LIST_ORDER", "asc")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/task_tracker.log"),
        )


def _from_project_root(raw: str) -> Path:
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path
