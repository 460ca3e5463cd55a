from typing import Optional
from .config import Settings
from .json_client.user_store import JsonFileUserStore
from .memory_client.user_store import InMemoryUserStore
from .sqlite_client.user_store import SqliteUserStore
from ..port.user_store import UserStore
from ..usecase.user_management.auth_gate import AuthGate
from ..usecase.user_management.account_service import AccountService

class DIContainer:
    """依存性注入コンテナ"""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._user_store: Optional[UserStore] = None
        self._auth_gate: Optional[AuthGate] = None
        self._account_service: Optional[AccountService] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    @property
    def user_store(self) -> UserStore:
        """設定されたバックエンドのユーザーストアを取得"""
        if self._user_store is None:
            self._user_store = self._create_user_store()
        return self._user_store

    @property
    def auth_gate(self) -> AuthGate:
        """認証ゲートのシングルトンインスタンスを取得"""
        if self._auth_gate is None:
            self._auth_gate = AuthGate(self.user_store)
        return self._auth_gate

    @property
    def account_service(self) -> AccountService:
        """アカウントサービスのシングルトンインスタンスを取得"""
        if self._account_service is None:
            self._account_service = AccountService(self.user_store)
        return self._account_service

    def use_user_store(self, user_store: UserStore) -> None:
        """ユーザーストアを差し替える（テスト用）"""
        self._user_store = user_store
        self._auth_gate = None
        self._account_service = None

    def reset(self) -> None:
        """ストアと依存オブジェクトを破棄し、次回アクセス時に設定から再生成する"""
        self._user_store = None
        self._auth_gate = None
        self._account_service = None

    def _create_user_store(self) -> UserStore:
        backend = self.settings.store_backend
        if backend == "memory":
            return InMemoryUserStore()
        if backend == "sqlite":
            return SqliteUserStore(self.settings.database_path)
        return JsonFileUserStore(self.settings.users_file)

# グローバルDIコンテナインスタンス
_container = DIContainer()

def get_auth_gate() -> AuthGate:
    """認証ゲートを取得"""
    return _container.auth_gate

def get_account_service() -> AccountService:
    """アカウントサービスを取得"""
    return _container.account_service

def get_container() -> DIContainer:
    """DIコンテナを取得（テスト用）"""
    return _container
