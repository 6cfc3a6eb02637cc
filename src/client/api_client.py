"""HTTP client for the task tracker API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from src.tasks import Task, TaskNotFoundError, TaskValidationError, UNSET

logger = logging.getLogger(__name__)


class TaskApiClient:
    """
    タスクAPIクライアント

    404はTaskNotFoundError、422はTaskValidationErrorに変換する。
    通信エラー(requests.RequestException)はそのまま送出する。
    """

    def __init__(self, api_url: str = "http://localhost:8000", timeout: float = 10.0):
        """
        Args:
            api_url: APIサーバーのURL
            timeout: リクエストタイムアウト（秒）
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        task_id: Optional[int] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        response = requests.request(
            method,
            f"{self.api_url}{path}",
            json=json,
            timeout=self.timeout,
        )
        if response.status_code == 404 and task_id is not None:
            raise TaskNotFoundError(task_id)
        if response.status_code == 422:
            raise TaskValidationError(_error_detail(response))
        response.raise_for_status()
        return response.json()

    def list_tasks(self) -> List[Task]:
        """全タスクを取得"""
        return [Task.from_dict(item) for item in self._request("GET", "/api/tasks")]

    def get_task(self, task_id: int) -> Task:
        return Task.from_dict(self._request("GET", f"/api/tasks/{task_id}", task_id))

    def create_task(self, title: str, description: Optional[str] = None) -> Task:
        """タスクを作成し、サーバーが採番したレコードを返す"""
        data = self._request(
            "POST", "/api/tasks", json={"title": title, "description": description}
        )
        return Task.from_dict(data)

    def update_task(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        description: Any = UNSET,
        completed: Optional[bool] = None,
    ) -> Task:
        """指定したフィールドのみ送信する（descriptionはNoneでクリア）"""
        payload: Dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if description is not UNSET:
            payload["description"] = description
        if completed is not None:
            payload["completed"] = completed
        data = self._request("PATCH", f"/api/tasks/{task_id}", task_id, json=payload)
        return Task.from_dict(data)

    def delete_task(self, task_id: int) -> bool:
        """削除成功ならTrue、該当IDが無ければFalse"""
        data = self._request("DELETE", f"/api/tasks/{task_id}")
        return bool(data["success"])


def _error_detail(response: requests.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        return response.text
    if isinstance(detail, list):
        # pydantic validation errors
        return "; ".join(str(item.get("msg", item)) for item in detail)
    return str(detail)
