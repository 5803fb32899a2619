"""模型包：导出所有 ORM 模型，确保建表时元数据完整。"""

from app.packages.gallery.models.base import Base
from app.packages.gallery.models.user import User

__all__ = ["Base", "User"]
