from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from ...domain.entity.user_entity import UserEntity

@dataclass
class SignupDTO:
    """
    アカウント作成用DTO

    None は未指定を表す。
    """
    user_id: Optional[str] = None
    password: Optional[str] = None

@dataclass
class UpdateProfileDTO:
    """
    プロフィール更新用DTO

    None は「未指定」、空文字列は「既定値に戻す」を表すため、両者を区別して扱う。
    user_id / password は変更不可のため、指定されていれば拒否する。
    リクエストボディの型検証は認可の後に行うため、値は受け取ったまま保持する。
    """
    nickname: Any = None
    comment: Any = None
    user_id: Any = None
    password: Any = None
    malformed: bool = False

    @classmethod
    def from_body(cls, body: Any) -> "UpdateProfileDTO":
        """JSONボディから生成する。オブジェクト以外は malformed として扱う"""
        if body is None:
            return cls()
        if not isinstance(body, dict):
            return cls(malformed=True)
        return cls(
            nickname=body.get("nickname"),
            comment=body.get("comment"),
            user_id=body.get("user_id"),
            password=body.get("password"),
        )

    def has_immutable_fields(self) -> bool:
        return bool(self.user_id) or bool(self.password)

    def is_empty(self) -> bool:
        return self.nickname is None and self.comment is None

@dataclass
class CredentialsDTO:
    """Basic認証ヘッダーから取り出した資格情報"""
    user_id: str
    password: str

@dataclass
class UserProfileDTO:
    """
    レスポンス用のユーザー情報DTO

    comment が None の場合はシリアライズ結果に含めない。
    """
    user_id: str
    nickname: str
    comment: Optional[str] = None

    @classmethod
    def created(cls, user: UserEntity) -> "UserProfileDTO":
        return cls(user_id=user.user_id, nickname=user.nickname)

    @classmethod
    def public(cls, user: UserEntity) -> "UserProfileDTO":
        """空のコメントは省略する"""
        return cls(
            user_id=user.user_id,
            nickname=user.nickname or user.user_id,
            comment=user.comment or None,
        )

    @classmethod
    def full(cls, user: UserEntity) -> "UserProfileDTO":
        return cls(user_id=user.user_id, nickname=user.nickname, comment=user.comment)

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in asdict(self).items() if value is not None}
