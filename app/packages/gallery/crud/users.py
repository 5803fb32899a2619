"""用户 CRUD：集中管理用户相关的数据操作。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.gallery.crud.base import CRUDBase
from app.packages.gallery.models.user import User


class CRUDUser(CRUDBase[User]):
    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        """根据唯一用户名获取用户实例。"""
        return self.query(db).filter(User.username == username).first()

    def create_user(
        self,
        db: Session,
        *,
        username: str,
        hashed_password: str,
        email: Optional[str] = None,
        auto_commit: bool = True,
    ) -> User:
        return self.create(
            db,
            {"username": username, "hashed_password": hashed_password, "email": email, "is_active": True},
            auto_commit=auto_commit,
        )


user_crud = CRUDUser(User)
