"""TaskApiClient のテスト（requests はモック）"""

from unittest.mock import Mock, patch

import pytest
import requests

from src.client.api_client import TaskApiClient
from src.tasks import TaskNotFoundError, TaskValidationError

TASK_JSON = {
    "id": 1,
    "title": "Buy milk",
    "description": None,
    "completed": False,
    "created_at": "2025-01-01T09:00:00Z",
    "updated_at": "2025-01-01T09:00:00Z",
}


def make_response(status_code: int = 200, payload=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def client() -> TaskApiClient:
    return TaskApiClient(api_url="http://testserver/", timeout=3)


class TestTaskApiClient:
    """TaskApiClientクラスのテスト"""

    @patch("src.client.api_client.requests.request")
    def test_list_tasks(self, mock_request, client) -> None:
        mock_request.return_value = make_response(payload=[TASK_JSON])

        tasks = client.list_tasks()

        assert len(tasks) == 1
        assert tasks[0].title == "Buy milk"
        assert tasks[0].created_at == tasks[0].updated_at
        mock_request.assert_called_once_with(
            "GET", "http://testserver/api/tasks", json=None, timeout=3
        )

    @patch("src.client.api_client.requests.request")
    def test_create_task_sends_title_and_description(self, mock_request, client) -> None:
        mock_request.return_value = make_response(payload={**TASK_JSON, "description": "2L"})

        task = client.create_task("Buy milk", "2L")

        assert task.description == "2L"
        _, kwargs = mock_request.call_args
        assert kwargs["json"] == {"title": "Buy milk", "description": "2L"}

    @patch("src.client.api_client.requests.request")
    def test_update_task_sends_only_supplied_fields(self, mock_request, client) -> None:
        mock_request.return_value = make_response(payload={**TASK_JSON, "completed": True})

        task = client.update_task(1, completed=True)

        assert task.completed is True
        args, kwargs = mock_request.call_args
        assert args == ("PATCH", "http://testserver/api/tasks/1")
        assert kwargs["json"] == {"completed": True}

    @patch("src.client.api_client.requests.request")
    def test_update_task_can_clear_description(self, mock_request, client) -> None:
        mock_request.return_value = make_response(payload=TASK_JSON)

        client.update_task(1, title="New", description=None)

        _, kwargs = mock_request.call_args
        assert kwargs["json"] == {"title": "New", "description": None}

    @patch("src.client.api_client.requests.request")
    def test_update_missing_raises_not_found(self, mock_request, client) -> None:
        mock_request.return_value = make_response(404, {"detail": "Task not found"})

        with pytest.raises(TaskNotFoundError):
            client.update_task(999, completed=True)

    @patch("src.client.api_client.requests.request")
    def test_validation_error(self, mock_request, client) -> None:
        mock_request.return_value = make_response(
            422, {"detail": [{"msg": "String should have at least 1 character"}]}
        )

        with pytest.raises(TaskValidationError, match="at least 1 character"):
            client.create_task("")

    @patch("src.client.api_client.requests.request")
    def test_delete_returns_success_flag(self, mock_request, client) -> None:
        mock_request.return_value = make_response(payload={"success": False})

        assert client.delete_task(999) is False

    @patch("src.client.api_client.requests.request")
    def test_server_error_propagates(self, mock_request, client) -> None:
        mock_request.return_value = make_response(500, {"detail": "Failed to list tasks"})

        with pytest.raises(requests.HTTPError):
            client.list_tasks()

    @patch("src.client.api_client.requests.request")
    def test_connection_error_propagates(self, mock_request, client) -> None:
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(requests.ConnectionError):
            client.list_tasks()
