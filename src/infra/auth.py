"""
認証モジュール

FastAPIのエンドポイントからBasic認証を利用するための依存性を提供します。
資格情報の解析と照合は AuthGate が行い、このモジュールはHTTPヘッダーとの
橋渡しと、401レスポンスに付与する WWW-Authenticate ヘッダーの生成を担います。

未認証は例外ではなく None として返します。認証の要否や、認証失敗を
他の検証とどの順序で扱うかはユースケース層が決めます。
"""

from typing import Annotated, Dict, Optional
from fastapi import Depends, Header

from src.domain.entity.user_entity import UserEntity
from src.infra.di import get_auth_gate, get_container
from src.usecase.user_management.auth_gate import AuthGate


def get_auth_gate_dependency() -> AuthGate:
    """
    認証ゲートの依存性を取得

    Returns:
        AuthGate: DIコンテナが保持する認証ゲート
    """
    return get_auth_gate()


def get_authenticated_user(
    auth_gate: Annotated[AuthGate, Depends(get_auth_gate_dependency)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[UserEntity]:
    """
    Authorizationヘッダーから呼び出し元ユーザーを解決する

    Args:
        auth_gate: 認証ゲート
        authorization: Authorizationヘッダーの値（無い場合はNone）

    Returns:
        Optional[UserEntity]: 認証に成功したユーザー、失敗した場合はNone

    Usage:
        @router.get("/protected")
        def protected(user: Optional[UserEntity] = Depends(get_authenticated_user)):
            ...
    """
    return auth_gate.authenticate(authorization)


def www_authenticate_headers() -> Dict[str, str]:
    """401レスポンスに付与するヘッダー"""
    realm = get_container().settings.auth_realm
    return {"WWW-Authenticate": f'Basic realm="{realm}", charset="UTF-8"'}
