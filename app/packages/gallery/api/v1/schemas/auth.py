"""认证相关请求/响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.packages.gallery.api.v1.schemas.common import ResponseEnvelope


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6)
    email: Optional[str] = Field(default=None, max_length=255)


class TokenData(BaseModel):
    access_token: str
    token_type: str


class UserInfo(BaseModel):
    user_id: int
    username: str
    email: Optional[str] = None


TokenResponse = ResponseEnvelope[TokenData]
RegisterResponse = ResponseEnvelope[UserInfo]
CurrentUserResponse = ResponseEnvelope[UserInfo]
LogoutResponse = ResponseEnvelope[None]
