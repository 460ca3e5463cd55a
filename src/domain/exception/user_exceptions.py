"""
アカウント関連の例外クラス

このモジュールは、アカウント管理に関する例外を定義します。
各例外はHTTPステータスコードとレスポンス用メッセージを保持し、
REST API層の例外ハンドラーが統一された形式のレスポンスに変換します。
"""

from enum import Enum
from typing import Optional


class InvalidInputCause(str, Enum):
    """入力エラーの原因コード"""
    MISSING_REQUIRED_FIELDS = "Required user_id and password"
    LENGTH_OUT_OF_RANGE = "Input Length is incorrect"
    INVALID_CHARACTER_PATTERN = "Incorrect character pattern"
    DUPLICATE_IDENTIFIER = "Already same user_id is used"
    IMMUTABLE_FIELDS = "Not updatable user_id and password"
    NOTHING_TO_UPDATE = "Required nickname or comment"
    LENGTH_LIMIT_EXCEEDED = "String length limit exceeded or containing invalid characters"
    MALFORMED_BODY = "Malformed request body"


class AccountException(Exception):
    """アカウント関連の基底例外クラス"""
    status_code: int = 500

    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidInputError(AccountException):
    """入力内容が不正な場合の例外"""
    status_code = 400

    def __init__(self, message: str, cause: InvalidInputCause):
        super().__init__(message, cause.value)
        self.cause_code = cause


class AuthenticationFailedError(AccountException):
    """認証情報が無効な場合の例外"""
    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class PermissionDeniedError(AccountException):
    """他ユーザーのリソースを操作しようとした場合の例外"""
    status_code = 403

    def __init__(self, message: str = "No permission for update"):
        super().__init__(message)


class UserNotFoundError(AccountException):
    """指定されたユーザーが見つからない場合の例外"""
    status_code = 404

    def __init__(self, user_id: str, message: str = "No user found"):
        super().__init__(message)
        self.user_id = user_id


class StoreError(AccountException):
    """ユーザーストアの読み書きに失敗した場合の例外"""
    status_code = 500

    def __init__(self, detail: str):
        super().__init__("Internal server error")
        self.detail = detail
