"""タスク管理のカスタム例外定義

ストレージ(sqlite3)や通信(requests)の例外はラップせずそのまま呼び出し元へ伝播させる。
"""


class TaskError(Exception):
    """タスク管理の基底例外"""

    pass


class TaskValidationError(TaskError):
    """入力値が不正（空のタイトルなど）"""

    pass


class TaskNotFoundError(TaskError):
    """指定IDのタスクが存在しない"""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
