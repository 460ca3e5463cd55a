from slowapi import Limiter
from slowapi.util import get_remote_address

from src.infra.config import Settings

_settings = Settings()

# レート制限の設定
# 認証前のエンドポイント（アカウント作成）に適用するため、IPアドレス単位で数える
limiter = Limiter(
    key_func=get_remote_address,
    enabled=_settings.rate_limit_enabled,
)

SIGNUP_RATE_LIMIT = _settings.signup_rate_limit
