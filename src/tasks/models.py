from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(slots=True)
class Task:
    """永続化済みタスクの表現。"""

    id: int
    title: str
    description: Optional[str]
    completed: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """JSON出力用の辞書に変換（日時はISO 8601文字列）"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """APIレスポンス（to_dict形式）から復元"""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description"),
            completed=bool(data["completed"]),
            created_at=_parse_timestamp(data["created_at"]),
            updated_at=_parse_timestamp(data["updated_at"]),
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    # Python 3.10 以前の fromisoformat は "Z" を受け付けない
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
