"""
アカウント管理のユースケース実装

アカウント作成・プロフィール取得・プロフィール更新・アカウント削除の
4つの操作を提供します。各操作は入力検証、認可、ストアの読み書きを行い、
失敗時はドメイン例外を送出します。

ストアへの読み込み→変更→書き込みはロックで直列化されます。
"""

import logging
import re
import threading
from typing import Any, List, Optional

from ...port.user_store import UserStore
from ...port.dto.user_dto import SignupDTO, UpdateProfileDTO, UserProfileDTO
from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import (
    InvalidInputCause,
    InvalidInputError,
    AuthenticationFailedError,
    PermissionDeniedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

USER_ID_MIN_LENGTH = 6
USER_ID_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20
NICKNAME_MAX_LENGTH = 30
COMMENT_MAX_LENGTH = 100

USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
# 空白を除くASCII印字可能文字 (0x21-0x7E)
PASSWORD_PATTERN = re.compile(r"^[\x21-\x7E]+$")

SIGNUP_FAILED = "Account creation failed"
UPDATE_FAILED = "User updation failed"


def _find_user(users: List[UserEntity], user_id: str) -> Optional[UserEntity]:
    return next((user for user in users if user.user_id == user_id), None)


def text_length(value: str) -> int:
    """UTF-16のコードユニット数で数える（サロゲートペアは2文字）"""
    return len(value.encode("utf-16-le")) // 2


def _exceeds(value: Any, max_length: int) -> bool:
    """未指定は対象外。文字列以外は不正な値として扱う"""
    if value is None:
        return False
    return not isinstance(value, str) or text_length(value) > max_length


class AccountService:
    """
    アカウント管理のユースケース
    """
    def __init__(self, user_store: UserStore):
        self.user_store = user_store
        self._lock = threading.Lock()

    def signup(self, dto: SignupDTO) -> UserProfileDTO:
        """
        新規アカウントを作成する

        検証は記述順に行い、最初に失敗した規則の原因を返す。

        Raises:
            InvalidInputError: 必須項目の欠落、長さ・文字種の不正、user_idの重複
        """
        user_id, password = dto.user_id, dto.password

        if not user_id or not password:
            raise InvalidInputError(SIGNUP_FAILED, InvalidInputCause.MISSING_REQUIRED_FIELDS)

        if not (USER_ID_MIN_LENGTH <= text_length(user_id) <= USER_ID_MAX_LENGTH) or \
                not (PASSWORD_MIN_LENGTH <= text_length(password) <= PASSWORD_MAX_LENGTH):
            raise InvalidInputError(SIGNUP_FAILED, InvalidInputCause.LENGTH_OUT_OF_RANGE)

        # re.match の $ は末尾の改行を許すため fullmatch を使う
        if not USER_ID_PATTERN.fullmatch(user_id) or not PASSWORD_PATTERN.fullmatch(password):
            raise InvalidInputError(SIGNUP_FAILED, InvalidInputCause.INVALID_CHARACTER_PATTERN)

        with self._lock:
            users = self.user_store.load()
            if _find_user(users, user_id) is not None:
                raise InvalidInputError(SIGNUP_FAILED, InvalidInputCause.DUPLICATE_IDENTIFIER)

            new_user = UserEntity(user_id=user_id, password=password, nickname=user_id, comment="")
            users.append(new_user)
            self.user_store.save(users)

        logger.info("Account created", extra={"user_id": user_id})
        return UserProfileDTO.created(new_user)

    def get_profile(self, authenticated: Optional[UserEntity], target_id: str) -> UserProfileDTO:
        """
        指定ユーザーのプロフィールを取得する

        認証済みであれば他ユーザーのプロフィールも参照できる。
        """
        if authenticated is None:
            raise AuthenticationFailedError()

        user = _find_user(self.user_store.load(), target_id)
        if user is None:
            raise UserNotFoundError(target_id)

        return UserProfileDTO.public(user)

    def update_profile(
        self,
        authenticated: Optional[UserEntity],
        target_id: str,
        dto: UpdateProfileDTO,
    ) -> UserProfileDTO:
        """
        自分自身の nickname / comment を更新する

        Raises:
            AuthenticationFailedError: 未認証
            PermissionDeniedError: 他ユーザーの更新
            UserNotFoundError: 対象ユーザーが存在しない
            InvalidInputError: オブジェクト以外のボディ、user_id/passwordの指定、
                更新項目なし、文字数超過または文字列以外の値
        """
        if authenticated is None:
            raise AuthenticationFailedError()

        if authenticated.user_id != target_id:
            raise PermissionDeniedError()

        with self._lock:
            users = self.user_store.load()
            user = _find_user(users, target_id)
            if user is None:
                raise UserNotFoundError(target_id)

            if dto.malformed:
                raise InvalidInputError(UPDATE_FAILED, InvalidInputCause.MALFORMED_BODY)

            if dto.has_immutable_fields():
                raise InvalidInputError(UPDATE_FAILED, InvalidInputCause.IMMUTABLE_FIELDS)

            if dto.is_empty():
                raise InvalidInputError(UPDATE_FAILED, InvalidInputCause.NOTHING_TO_UPDATE)

            if _exceeds(dto.nickname, NICKNAME_MAX_LENGTH) or _exceeds(dto.comment, COMMENT_MAX_LENGTH):
                raise InvalidInputError(UPDATE_FAILED, InvalidInputCause.LENGTH_LIMIT_EXCEEDED)

            if dto.nickname is not None:
                user.change_nickname(dto.nickname)
            if dto.comment is not None:
                user.change_comment(dto.comment)

            self.user_store.save(users)

        logger.info(
            "Profile updated",
            extra={
                "user_id": target_id,
                "fields": [name for name in ("nickname", "comment") if getattr(dto, name) is not None],
            }
        )
        return UserProfileDTO.full(user)

    def close_account(self, authenticated: Optional[UserEntity]) -> None:
        """
        認証済みユーザー自身のアカウントを削除する
        """
        if authenticated is None:
            raise AuthenticationFailedError()

        with self._lock:
            users = self.user_store.load()
            remaining = [user for user in users if user.user_id != authenticated.user_id]
            self.user_store.save(remaining)

        logger.info("Account closed", extra={"user_id": authenticated.user_id})
