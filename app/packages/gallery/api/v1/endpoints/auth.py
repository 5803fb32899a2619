"""认证相关路由定义。"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.packages.gallery.api.v1.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.packages.gallery.core.constants import ACCESS_TOKEN_HEADER, HTTP_STATUS_OK
from app.packages.gallery.core.dependencies import CurrentSession, get_current_active_user, get_current_session, get_db
from app.packages.gallery.core.responses import create_response
from app.packages.gallery.core.security import clear_auth_cookie, set_auth_cookie
from app.packages.gallery.models.user import User
from app.packages.gallery.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_info(user: User) -> dict:
    return {"user_id": user.id, "username": user.username, "email": user.email}


@router.post("/register", response_model=RegisterResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, username=payload.username, password=payload.password, email=payload.email)
    return create_response("注册成功", _user_info(user), HTTP_STATUS_OK)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """校验凭证并签发访问令牌，同时写入登录 Cookie。"""
    result = auth_service.login(db, username=payload.username, password=payload.password)
    set_auth_cookie(response, result["data"]["access_token"])
    return result


@router.post("/logout", response_model=LogoutResponse)
def logout(response: Response, current: CurrentSession = Depends(get_current_session)):
    auth_service.logout(current.session_id)
    # 会话已删除，不再下发续期令牌
    del response.headers[ACCESS_TOKEN_HEADER]
    clear_auth_cookie(response)
    return create_response("退出登录成功", None, HTTP_STATUS_OK)


@router.get("/me", response_model=CurrentUserResponse)
def me(current_user: User = Depends(get_current_active_user)):
    return create_response("OK", _user_info(current_user), HTTP_STATUS_OK)
