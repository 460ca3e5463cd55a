import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.infra.config import Settings
from src.infra.logging_config import LoggingMiddleware, get_logger
from src.domain.exception.user_exceptions import AccountException

from .routers.accounts import router as accounts_router
from .schemas import HealthResponse
from .error_handlers import (
    handle_account_exception,
    handle_validation_exception,
    handle_http_exception,
    handle_rate_limit_exceeded,
    handle_generic_error,
)
from .rate_limiter import limiter

APP_VERSION = "0.1.0"

# Initialize settings and logger
settings = Settings()
# 本番環境では適切なログレベルを設定する
log_level = logging.INFO if settings.environment == "production" else logging.DEBUG
logger = get_logger("app", level=log_level, log_file=settings.log_file)
# ユースケース層のロガー (src.usecase.*) はこのロガーに伝播する
get_logger("src", level=log_level, log_file=settings.log_file)

app = FastAPI(
    title="Account API",
    version=APP_VERSION
)

# レート制限の設定
app.state.limiter = limiter

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS 設定（環境設定に基づく）
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts_router)

logger.info(
    "Application configured",
    extra={"environment": settings.environment, "store_backend": settings.store_backend}
)

@app.get("/health", response_model=HealthResponse)
def health_check():
    """ヘルスチェックエンドポイント"""
    return HealthResponse(status="healthy", version=APP_VERSION)

# エラーハンドラーの登録
app.add_exception_handler(AccountException, handle_account_exception)
app.add_exception_handler(RequestValidationError, handle_validation_exception)
app.add_exception_handler(StarletteHTTPException, handle_http_exception)
app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exceeded)
app.add_exception_handler(Exception, handle_generic_error)


#uvicorn src.infra.rest_api.main:app --reload
