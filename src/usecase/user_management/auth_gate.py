"""
Basic認証ゲート

Authorizationヘッダーから資格情報を取り出し、ユーザーストアと照合します。
ヘッダーが無い・形式が不正・資格情報が一致しない場合はいずれも None を返し、
例外は送出しません。未認証をどう扱うかは呼び出し側が判断します。
"""

import base64
import binascii
import logging
import re
from typing import Optional

from ...port.user_store import UserStore
from ...port.dto.user_dto import CredentialsDTO
from ...domain.entity.user_entity import UserEntity

logger = logging.getLogger(__name__)

BASIC_SCHEME = "basic"
# token68 形式。パディングの省略と URL-safe 文字を許容する
TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9._~+/-]+=*$")


def _decode_token(token: str) -> bytes:
    """
    パディング無し・URL-safe の base64 も復号する

    '.' と '~' は base64 の文字ではないため読み飛ばす。
    """
    if not TOKEN_PATTERN.fullmatch(token):
        raise binascii.Error("invalid token68")
    body = token.rstrip("=").translate(str.maketrans("-_", "+/", ".~"))
    return base64.b64decode(body + "=" * (-len(body) % 4), validate=True)


def parse_basic_authorization(header: Optional[str]) -> Optional[CredentialsDTO]:
    """
    "Basic <base64(user_id:password)>" 形式のヘッダーを解析する

    Args:
        header: Authorizationヘッダーの値

    Returns:
        Optional[CredentialsDTO]: 解析できた場合は資格情報、できなければNone
    """
    if not header:
        return None

    scheme, _, param = header.strip().partition(" ")
    if scheme.lower() != BASIC_SCHEME:
        return None

    try:
        decoded = _decode_token(param.strip()).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    # パスワード側には ':' が含まれうるため最初の ':' で分割する
    user_id, separator, password = decoded.partition(":")
    if not separator:
        return None

    return CredentialsDTO(user_id=user_id, password=password)


class AuthGate:
    """
    リクエストの資格情報をユーザーに解決する
    """
    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    def authenticate(self, authorization: Optional[str]) -> Optional[UserEntity]:
        credentials = parse_basic_authorization(authorization)
        if credentials is None:
            return None

        for user in self.user_store.load():
            if user.matches_credentials(credentials.user_id, credentials.password):
                return user

        logger.warning("Authentication rejected", extra={"user_id": credentials.user_id})
        return None
