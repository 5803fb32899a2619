"""认证服务：封装注册、登录与退出登录的核心业务流程。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.gallery.core.constants import (
    ACCESS_TOKEN_TYPE,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_OK,
    HTTP_STATUS_UNAUTHORIZED,
)
from app.packages.gallery.core.exceptions import AppException
from app.packages.gallery.core.logger import logger
from app.packages.gallery.core.responses import create_response
from app.packages.gallery.core.security import (
    get_password_hash,
    issue_session_token,
    verify_password,
)
from app.packages.gallery.core.session import create_session, delete_session, session_ttl_seconds
from app.packages.gallery.crud.users import user_crud
from app.packages.gallery.models.user import User

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """负责处理用户注册与登录流程，并保持逻辑聚合。"""

    def register_user(self, db: Session, *, username: str, password: str, email: Optional[str] = None) -> User:
        """创建新用户，用户名重复时返回 409。"""
        username = (username or "").strip()
        if not username:
            raise AppException(msg="用户名不能为空", code=HTTP_STATUS_BAD_REQUEST)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AppException(msg=f"密码长度不能少于 {MIN_PASSWORD_LENGTH} 位", code=HTTP_STATUS_BAD_REQUEST)
        if user_crud.get_by_username(db, username):
            raise AppException(msg="用户名已存在", code=HTTP_STATUS_CONFLICT)

        user = user_crud.create_user(
            db,
            username=username,
            hashed_password=get_password_hash(password),
            email=(email or "").strip() or None,
        )
        logger.info("Registered user %s", user.username)
        return user

    def authenticate(self, db: Session, *, username: str, password: str) -> str:
        """校验用户凭证，创建滑动会话并签发访问令牌。"""
        user = user_crud.get_by_username(db, (username or "").strip())
        if user is None or not verify_password(password or "", user.hashed_password):
            logger.warning("Failed login attempt for %r", username)
            raise AppException(msg="用户名或密码错误", code=HTTP_STATUS_UNAUTHORIZED)
        if not user.is_active:
            raise AppException(msg="用户未激活", code=HTTP_STATUS_UNAUTHORIZED)

        session_id = create_session(user.id, session_ttl_seconds())
        logger.info("User %s logged in", user.username)
        return issue_session_token(user.id, user.username, session_id)

    def login(self, db: Session, *, username: str, password: str) -> dict:
        access_token = self.authenticate(db, username=username, password=password)
        return create_response(
            "登录成功",
            {"access_token": access_token, "token_type": ACCESS_TOKEN_TYPE},
            HTTP_STATUS_OK,
        )

    def logout(self, session_id: str) -> None:
        """删除服务端会话，之后该会话签发的所有令牌都会被拒绝。"""
        delete_session(session_id)
        logger.info("Session %s logged out", session_id)


auth_service = AuthService()
