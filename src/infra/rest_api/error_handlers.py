from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded
from typing import Dict, Optional
from src.infra.auth import www_authenticate_headers
from src.infra.logging_config import get_logger
from ...domain.exception.user_exceptions import (
    AccountException,
    AuthenticationFailedError,
    InvalidInputCause,
    StoreError,
)

logger = get_logger("api.errors")

INVALID_BODY_MESSAGE = "Invalid request body"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def create_error_response(
    message: str,
    status_code: int,
    cause: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """統一されたエラーレスポンスを作成"""
    content = {"message": message}

    # cause は 400 系の入力エラーのみに付与する
    if cause:
        content["cause"] = cause

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers
    )


async def handle_account_exception(request: Request, exc: AccountException):
    """アカウント例外のハンドリング"""
    extra = {
        "path": request.url.path,
        "method": request.method,
        "status_code": exc.status_code,
        "error": exc.message,
    }

    if isinstance(exc, StoreError):
        logger.error("User store failure", extra={**extra, "detail": exc.detail})
    else:
        logger.warning(f"Account exception: {exc.__class__.__name__}", extra={**extra, "cause": exc.cause})

    headers = www_authenticate_headers() if isinstance(exc, AuthenticationFailedError) else None

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        cause=exc.cause,
        headers=headers
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """FastAPIバリデーションエラーのハンドリング"""
    logger.warning(
        "Request body validation error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "errors": [error.get("msg") for error in exc.errors()]
        }
    )

    return create_error_response(
        message=INVALID_BODY_MESSAGE,
        status_code=status.HTTP_400_BAD_REQUEST,
        cause=InvalidInputCause.MALFORMED_BODY.value
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """ルーティング等で発生したHTTP例外を共通形式に変換"""
    logger.warning(
        "HTTP exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        }
    )

    return create_error_response(
        message=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None)
    )


def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """レート制限超過のハンドリング"""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method,
            "limit": str(exc.detail),
        }
    )

    return create_error_response(
        message="Too many requests",
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))}
    )


async def handle_generic_error(request: Request, exc: Exception):
    """その他のエラーのハンドリング"""
    logger.error(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
            "error_type": type(exc).__name__
        },
        exc_info=True
    )

    return create_error_response(
        message=INTERNAL_ERROR_MESSAGE,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
