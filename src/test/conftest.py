import base64
import os
import sys

import pytest

# Add path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

# アプリケーションのimport前に設定する
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")


def basic_auth(user_id: str, password: str) -> dict:
    """Basic認証ヘッダーを作成する"""
    token = base64.b64encode(f"{user_id}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def user_store():
    from src.infra.memory_client.user_store import InMemoryUserStore
    return InMemoryUserStore()


@pytest.fixture
def client(user_store):
    """インメモリストアを使うテストクライアント"""
    from fastapi.testclient import TestClient
    from src.infra.di import get_container
    from src.infra.rest_api.main import app

    container = get_container()
    container.use_user_store(user_store)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.reset()
