from typing import Annotated, Any, Optional
from fastapi import APIRouter, Body, Depends, Request

from ..dependencies import get_account_service_dependency, get_authenticated_user
from ..rate_limiter import limiter, SIGNUP_RATE_LIMIT
from ..schemas import (
    AccountResponse,
    ErrorResponse,
    SignupRequest,
    UserProfile,
)
from ....port.dto.user_dto import UpdateProfileDTO
from ....domain.entity.user_entity import UserEntity
from ....usecase.user_management.account_service import AccountService

router = APIRouter(tags=["accounts"])

AuthenticatedUser = Annotated[Optional[UserEntity], Depends(get_authenticated_user)]
Service = Annotated[AccountService, Depends(get_account_service_dependency)]


@router.post(
    "/signup",
    response_model=AccountResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
@limiter.limit(SIGNUP_RATE_LIMIT)
def signup(
    request: Request,
    service: Service,
    req: Optional[SignupRequest] = None,
):
    """
    新規アカウント作成
    """
    user = service.signup((req or SignupRequest()).to_dto())
    return AccountResponse(
        message="Account successfully created",
        user=UserProfile.from_dto(user)
    )


@router.get(
    "/users/{user_id}",
    response_model=AccountResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_user(user_id: str, authenticated: AuthenticatedUser, service: Service):
    """
    ユーザー情報の取得（コメントが空の場合は省略）
    """
    user = service.get_profile(authenticated, user_id)
    return AccountResponse(
        message="User details by user_id",
        user=UserProfile.from_dto(user)
    )


@router.patch(
    "/users/{user_id}",
    response_model=AccountResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def update_user(
    user_id: str,
    authenticated: AuthenticatedUser,
    service: Service,
    payload: Annotated[Any, Body()] = None,
):
    """
    自分自身の nickname / comment を更新

    ボディの形と値の型は認可の後にサービス側で検証する。
    """
    user = service.update_profile(authenticated, user_id, UpdateProfileDTO.from_body(payload))
    return AccountResponse(
        message="User successfully updated",
        user=UserProfile.from_dto(user)
    )


@router.post(
    "/close",
    response_model=AccountResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}},
)
def close_account(authenticated: AuthenticatedUser, service: Service):
    """
    認証済みユーザーのアカウント削除
    """
    service.close_account(authenticated)
    return AccountResponse(message="Account and user successfully removed")
