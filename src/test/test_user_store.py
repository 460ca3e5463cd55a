"""ユーザーストア実装のテスト"""
import json

import pytest

from src.domain.entity.user_entity import UserEntity
from src.domain.exception.user_exceptions import StoreError
from src.infra.json_client.user_store import JsonFileUserStore
from src.infra.memory_client.user_store import InMemoryUserStore
from src.infra.sqlite_client.user_store import SqliteUserStore


def sample_users():
    return [
        UserEntity(user_id="TaroYamada", password="PASSwd4TY", nickname="Taro", comment="hello"),
        UserEntity(user_id="HanakoSato", password="hanako-pass"),
    ]


class TestInMemoryUserStore:

    def test_starts_empty(self):
        assert InMemoryUserStore().load() == []

    def test_save_and_load(self):
        store = InMemoryUserStore()
        store.save(sample_users())

        assert store.load() == sample_users()

    def test_mutation_before_save_is_not_visible(self):
        store = InMemoryUserStore(sample_users())
        users = store.load()
        users[0].comment = "changed"

        assert store.load()[0].comment == "hello"


class TestJsonFileUserStore:

    def test_missing_file_loads_empty(self, tmp_path):
        assert JsonFileUserStore(str(tmp_path / "users.json")).load() == []

    def test_save_writes_users_json_format(self, tmp_path):
        path = tmp_path / "nested" / "users.json"
        JsonFileUserStore(str(path)).save(sample_users())

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [
            {"user_id": "TaroYamada", "password": "PASSwd4TY", "nickname": "Taro", "comment": "hello"},
            {"user_id": "HanakoSato", "password": "hanako-pass", "nickname": "HanakoSato", "comment": ""},
        ]
        assert list(path.parent.glob("*.tmp")) == []

    def test_round_trip_preserves_order(self, tmp_path):
        store = JsonFileUserStore(str(tmp_path / "users.json"))
        store.save(sample_users())

        assert [u.user_id for u in store.load()] == ["TaroYamada", "HanakoSato"]

    def test_missing_optional_fields_get_defaults(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([{"user_id": "TaroYamada", "password": "PASSwd4TY"}]))

        user = JsonFileUserStore(str(path)).load()[0]
        assert user.nickname == "TaroYamada"
        assert user.comment == ""

    @pytest.mark.parametrize("content", [
        "not json",
        '{"user_id": "TaroYamada"}',
        '[1, 2, 3]',
        '[{"user_id": "TaroYamada"}]',
    ])
    def test_corrupt_content_raises_store_error(self, tmp_path, content):
        path = tmp_path / "users.json"
        path.write_text(content)

        with pytest.raises(StoreError) as exc_info:
            JsonFileUserStore(str(path)).load()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"


class TestSqliteUserStore:

    @pytest.fixture
    def store(self, tmp_path):
        store = SqliteUserStore(str(tmp_path / "db" / "accounts.db"))
        yield store
        store.close()

    def test_starts_empty(self, store):
        assert store.load() == []

    def test_save_and_load(self, store):
        store.save(sample_users())

        assert store.load() == sample_users()

    def test_save_replaces_contents(self, store):
        store.save(sample_users())
        store.save(sample_users()[1:])

        assert [u.user_id for u in store.load()] == ["HanakoSato"]

    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "accounts.db")
        first = SqliteUserStore(path)
        first.save(sample_users())
        first.close()

        second = SqliteUserStore(path)
        try:
            assert [u.user_id for u in second.load()] == ["TaroYamada", "HanakoSato"]
        finally:
            second.close()
