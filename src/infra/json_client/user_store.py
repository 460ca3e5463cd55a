import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from ...port.user_store import UserStore
from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import StoreError

USER_FIELDS = ("user_id", "password", "nickname", "comment")


def _to_record(user: UserEntity) -> Dict[str, str]:
    return {field: getattr(user, field) for field in USER_FIELDS}


def _from_record(record: Any) -> UserEntity:
    if not isinstance(record, dict):
        raise ValueError(f"user record must be an object, got {type(record).__name__}")
    user_id, password = record.get("user_id"), record.get("password")
    if not isinstance(user_id, str) or not isinstance(password, str):
        raise ValueError("user record requires string user_id and password")
    return UserEntity(
        user_id=user_id,
        password=password,
        nickname=record.get("nickname") or user_id,
        comment=record.get("comment") or "",
    )


class JsonFileUserStore(UserStore):
    """
    JSONファイルを用いた UserStore の実装

    users.json 形式（ユーザーオブジェクトの配列）を読み書きする。
    ファイルが存在しない場合は空として扱う。
    """
    def __init__(self, file_path: str = "./data/users.json"):
        self.file_path = Path(file_path)

    def load(self) -> List[UserEntity]:
        if not self.file_path.exists():
            return []

        try:
            with open(self.file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self.file_path}: {e}") from e

        if not isinstance(data, list):
            raise StoreError(f"{self.file_path} must contain a JSON array")

        try:
            return [_from_record(record) for record in data]
        except ValueError as e:
            raise StoreError(f"Corrupt user record in {self.file_path}: {e}") from e

    def save(self, users: List[UserEntity]) -> None:
        content = json.dumps([_to_record(user) for user in users], indent=2, ensure_ascii=False)
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            # 書き込み途中のファイルを読まれないよう一時ファイル経由で置き換える
            fd, tmp_path = tempfile.mkstemp(dir=self.file_path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write {self.file_path}: {e}") from e
