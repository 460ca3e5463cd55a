"""
FastAPI依存性注入の定義

このモジュールは、FastAPIエンドポイントで使用される依存性注入関数を提供します。
DIコンテナから適切なサービスインスタンスを取得し、FastAPIの依存性システムに
統合するためのアダプターレイヤーとして機能します。

主要機能:
- DIコンテナからのアカウントサービス取得
- 認証済みユーザーの解決（src.infra.auth に委譲）
"""

from ..di import get_account_service
from ..auth import get_authenticated_user
from ...usecase.user_management.account_service import AccountService

__all__ = [
    "get_account_service_dependency",
    "get_authenticated_user",
]

def get_account_service_dependency() -> AccountService:
    """
    アカウントサービスの依存性を取得

    DIコンテナからシングルトンのアカウントサービスを取得します。
    ストアへの書き込みを直列化するロックはこのインスタンスが保持するため、
    リクエストごとに生成してはいけません。

    Returns:
        AccountService: アカウント管理ユースケース
    """
    return get_account_service()
