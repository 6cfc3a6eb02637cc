"""タスクCLI の動作テスト"""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], db_path: Path) -> subprocess.CompletedProcess:
    """CLI実行ヘルパー"""
    cmd = [
        sys.executable,
        "-m",
        "src.tasks.cli",
        "--db-path",
        str(db_path),
    ] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


def add_task(db_path: Path, title: str, *extra: str) -> dict:
    result = run_cli(["add", "--title", title, *extra, "--format", "json"], db_path)
    assert result.returncode == 0, result.stderr
    return json.loads(result.stdout)


def test_cli_list_empty(tmp_path):
    """空のリスト取得"""
    result = run_cli(["list", "--format", "json"], tmp_path / "cli_test.db")
    assert result.returncode == 0
    assert json.loads(result.stdout) == []


def test_cli_add_and_list(tmp_path):
    """タスク追加とリスト取得"""
    db_path = tmp_path / "cli_test.db"
    added = add_task(db_path, "会議準備", "--description", "資料作成とリハーサル")
    assert added["title"] == "会議準備"
    assert added["completed"] is False
    assert added["created_at"] == added["updated_at"]

    result = run_cli(["list", "--format", "json"], db_path)
    assert result.returncode == 0
    items = json.loads(result.stdout)
    assert [item["id"] for item in items] == [added["id"]]


def test_cli_add_blank_title_fails(tmp_path):
    result = run_cli(["add", "--title", "  "], tmp_path / "cli_test.db")
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_update(tmp_path):
    """タスク更新"""
    db_path = tmp_path / "cli_test.db"
    task_id = add_task(db_path, "買い物")["id"]

    result = run_cli(
        [
            "update",
            "--id",
            str(task_id),
            "--title",
            "買い物（牛乳とパン）",
            "--description",
            "スーパーで購入",
            "--completed",
            "true",
            "--format",
            "json",
        ],
        db_path,
    )
    assert result.returncode == 0
    updated = json.loads(result.stdout)
    assert updated["title"] == "買い物（牛乳とパン）"
    assert updated["description"] == "スーパーで購入"
    assert updated["completed"] is True


def test_cli_complete_and_reopen(tmp_path):
    db_path = tmp_path / "cli_test.db"
    task_id = add_task(db_path, "タスクA", "--description", "詳細")["id"]

    result = run_cli(["complete", "--id", str(task_id), "--format", "json"], db_path)
    assert result.returncode == 0
    completed = json.loads(result.stdout)
    assert completed["completed"] is True
    assert completed["description"] == "詳細"

    result = run_cli(["reopen", "--id", str(task_id), "--format", "json"], db_path)
    assert json.loads(result.stdout)["completed"] is False


def test_cli_clear_description(tmp_path):
    db_path = tmp_path / "cli_test.db"
    task_id = add_task(db_path, "説明クリア", "--description", "消える")["id"]

    result = run_cli(
        ["update", "--id", str(task_id), "--clear-description", "--format", "json"], db_path
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["description"] is None


def test_cli_delete(tmp_path):
    """タスク削除"""
    db_path = tmp_path / "cli_test.db"
    task_id = add_task(db_path, "タスクB")["id"]

    result = run_cli(["delete", "--id", str(task_id), "--format", "json"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"success": True, "id": task_id}

    result = run_cli(["list", "--format", "json"], db_path)
    assert json.loads(result.stdout) == []


def test_cli_delete_missing_is_not_error(tmp_path):
    result = run_cli(["delete", "--id", "999", "--format", "json"], tmp_path / "cli_test.db")
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"success": False, "id": 999}


def test_cli_error_invalid_id(tmp_path):
    """存在しないID指定でエラー"""
    db_path = tmp_path / "cli_test.db"

    result = run_cli(["get", "--id", "999", "--format", "json"], db_path)
    assert result.returncode == 1
    assert "見つかりません" in result.stderr

    result = run_cli(["complete", "--id", "999"], db_path)
    assert result.returncode == 1


def test_cli_text_format(tmp_path):
    """テキスト形式出力"""
    db_path = tmp_path / "cli_test.db"
    run_cli(["add", "--title", "テキストテスト", "--description", "説明文"], db_path)

    result = run_cli(["list", "--format", "text"], db_path)
    assert result.returncode == 0
    assert "テキストテスト" in result.stdout
    assert "説明文" in result.stdout
    assert "0/1 completed" in result.stdout


def test_cli_update_blank_title_fails(tmp_path):
    """空白タイトルへの更新はエラー"""
    db_path = tmp_path / "cli_test.db"
    task_id = add_task(db_path, "元のタイトル")["id"]

    result = run_cli(["update", "--id", str(task_id), "--title", "  "], db_path)
    assert result.returncode == 1
    assert "Error" in result.stderr

    result = run_cli(["get", "--id", str(task_id), "--format", "json"], db_path)
    assert json.loads(result.stdout)["title"] == "元のタイトル"
