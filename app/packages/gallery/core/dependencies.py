"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.packages.gallery.core.config import PhotoUploadConfiguration, get_settings
from app.packages.gallery.core.constants import ACCESS_TOKEN_HEADER, ACCESS_TOKEN_TYPE
from app.packages.gallery.core.security import decode_token, issue_session_token
from app.packages.gallery.core.session import session_ttl_seconds, touch_session
from app.packages.gallery.crud.users import user_crud
from app.packages.gallery.db import session as db_session
from app.packages.gallery.models.user import User
from app.packages.gallery.services.photo_delete_service import PhotoDeleteService
from app.packages.gallery.services.photo_upload_service import PhotoUploadService

security_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_photo_upload_configuration() -> PhotoUploadConfiguration:
    return get_settings().photo_upload


def get_photo_upload_service(
    config: PhotoUploadConfiguration = Depends(get_photo_upload_configuration),
) -> PhotoUploadService:
    return PhotoUploadService(config)


def get_photo_delete_service(
    config: PhotoUploadConfiguration = Depends(get_photo_upload_configuration),
) -> PhotoDeleteService:
    return PhotoDeleteService(config)


@dataclass(frozen=True)
class CurrentSession:
    """已认证请求的身份：用户及其会话 ID（退出登录时据此删除会话）。"""

    user: User
    session_id: str


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """优先读取 ``Authorization: Bearer``，其次读取登录 Cookie。"""
    if credentials is not None:
        if credentials.scheme.lower() != ACCESS_TOKEN_TYPE:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="认证类型无效")
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name)


def _resolve_session(db: Session, token: str) -> CurrentSession:
    payload = decode_token(token)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token 无效或已过期")

    user_id = payload.get("user_id")
    session_id = payload.get("sid")
    if user_id is None or session_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token 无效")

    user = user_crud.get(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="用户不存在")

    if not touch_session(session_id, user.id, session_ttl_seconds()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token 无效或已过期")
    return CurrentSession(user=user, session_id=session_id)


def get_current_session(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
) -> CurrentSession:
    """解析 Bearer 头或登录 Cookie，不存在或非法时抛出 401。

    会话在存储中滑动续期，同时通过 ``X-Access-Token`` 响应头下发新签发的令牌。
    """
    token = _extract_token(request, credentials)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="缺少认证信息")
    current = _resolve_session(db, token)
    user = current.user
    response.headers[ACCESS_TOKEN_HEADER] = issue_session_token(user.id, user.username, current.session_id)
    return current


def get_current_user(current: CurrentSession = Depends(get_current_session)) -> User:
    return current.user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """确保已认证用户仍处于激活状态，否则拒绝访问。"""
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="用户未激活")
    return current_user


def get_optional_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
) -> Optional[CurrentSession]:
    """页面渲染使用：未登录、凭证失效或用户未激活时返回 ``None`` 而不是 401。"""
    try:
        token = _extract_token(request, credentials)
        if not token:
            return None
        current = _resolve_session(db, token)
    except HTTPException:
        return None
    return current if current.user.is_active else None


def get_optional_user(current: Optional[CurrentSession] = Depends(get_optional_session)) -> Optional[User]:
    return current.user if current is not None else None
