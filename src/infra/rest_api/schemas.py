from pydantic import BaseModel
from typing import Optional

from src.port.dto.user_dto import SignupDTO, UserProfileDTO


class SignupRequest(BaseModel):
    user_id: Optional[str] = None
    password: Optional[str] = None

    def to_dto(self) -> SignupDTO:
        return SignupDTO(user_id=self.user_id, password=self.password)


class UserProfile(BaseModel):
    user_id: str
    nickname: str
    comment: Optional[str] = None

    @classmethod
    def from_dto(cls, dto: UserProfileDTO) -> "UserProfile":
        return cls(**dto.to_dict())


class AccountResponse(BaseModel):
    """
    成功レスポンスの共通形式

    None のフィールドは response_model_exclude_none によって省略される。
    """
    message: str
    user: Optional[UserProfile] = None


class ErrorResponse(BaseModel):
    message: str
    cause: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
