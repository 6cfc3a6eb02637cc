from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from .models import Task

logger = logging.getLogger(__name__)

UNSET = object()

_ORDER_BY = {"asc": "id ASC", "desc": "id DESC"}


class TaskRepository:
    """SQLiteベースのタスク管理。1操作 = 1接続・1トランザクション。"""

    def __init__(
        self,
        db_path: Path | str,
        *,
        list_order: str = "asc",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if list_order not in _ORDER_BY:
            raise ValueError(f"Unsupported list order: {list_order!r}")
        self.db_path = Path(db_path)
        self.list_order = list_order
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()
        logger.debug("TaskRepository ready db=%s order=%s", self.db_path, list_order)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL CHECK (length(trim(title)) > 0),
                    description TEXT,
                    completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1)),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def _now(self) -> str:
        return self._clock().isoformat()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            completed=bool(row["completed"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def list(self) -> list[Task]:
        with closing(self._connect()) as conn:
            rows = conn.execute(
                f"SELECT * FROM tasks ORDER BY {_ORDER_BY[self.list_order]}"
            ).fetchall()
        return [self._row_to_task(row) for row in rows]

    def get(self, task_id: int) -> Optional[Task]:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return self._row_to_task(row) if row else None

    def create(self, title: str, description: Optional[str] = None) -> Task:
        now = self._now()
        with closing(self._connect()) as conn:
            cursor = conn.execute(
                """
                INSERT INTO tasks (title, description, completed, created_at, updated_at)
                VALUES (?, ?, 0, ?, ?)
                """,
                (title, description, now, now),
            )
            conn.commit()
            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return self._row_to_task(row)

    def update(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        description: Any = UNSET,
        completed: Optional[bool] = None,
    ) -> Optional[Task]:
        """指定フィールドのみ更新する。updated_atは常に更新。該当なしはNone。

        descriptionはNoneを指定するとクリア、UNSETのままなら変更しない。
        """
        fields: list[str] = []
        params: list[object] = []

        if title is not None:
            fields.append("title = ?")
            params.append(title)
        if description is not UNSET:
            fields.append("description = ?")
            params.append(description)
        if completed is not None:
            fields.append("completed = ?")
            params.append(1 if completed else 0)

        fields.append("updated_at = ?")
        params.append(self._now())
        params.append(task_id)

        with closing(self._connect()) as conn:
            cursor = conn.execute(
                f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?", params
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()

        return self._row_to_task(row) if row else None

    def delete(self, task_id: int) -> bool:
        with closing(self._connect()) as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            return cursor.rowcount > 0
