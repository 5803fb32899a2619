"""照片管理服务：列出上传目录中的照片（附带内联缩略图）并按文件名批量删除。

上传目录本身就是唯一的数据源：没有元数据表，文件名即标识，创建时间取自文件系统。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from app.packages.gallery.core.config import PhotoUploadConfiguration
from app.packages.gallery.core.exceptions import InvalidFileNameError, PhotoStorageError
from app.packages.gallery.core.logger import logger
from app.packages.gallery.core.timezone import from_timestamp
from app.packages.gallery.services.mime_types import build_data_url


@dataclass
class UploadedFileInfo:
    file_name: str
    display_name: str
    thumbnail_url: str
    upload_date: datetime

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "displayName": self.display_name,
            "thumbnailUrl": self.thumbnail_url,
            "uploadDate": self.upload_date.isoformat(),
        }


def creation_time(stat_result: os.stat_result) -> float:
    """优先使用文件的出生时间（macOS/Windows），否则退回 ``st_ctime``。"""
    birth = getattr(stat_result, "st_birthtime", None)
    if birth:
        return birth
    return stat_result.st_ctime


def is_safe_file_name(name: str) -> bool:
    """文件名只能是上传目录下的单个条目，不允许目录分隔符或 ``..``。"""
    if not name or name in {".", ".."}:
        return False
    if "\x00" in name or "/" in name or "\\" in name:
        return False
    return True


class PhotoDeleteService:
    def __init__(self, config: PhotoUploadConfiguration) -> None:
        self.upload_path = Path(config.upload_path)

    def get_uploaded_files(self) -> List[UploadedFileInfo]:
        """按创建时间倒序返回所有照片，每次都完整读取文件并编码为 Data URL。"""
        entries = self._scan()
        return [
            UploadedFileInfo(
                file_name=name,
                display_name=name,
                thumbnail_url=self._file_data_url(path),
                upload_date=from_timestamp(created),
            )
            for name, path, created in entries
        ]

    def list_file_names(self) -> List[str]:
        """仅返回文件名（目录枚举顺序），目录不存在时返回空列表。"""
        if not self.upload_path.is_dir():
            return []
        try:
            with os.scandir(self.upload_path) as it:
                return [entry.name for entry in it if entry.is_file()]
        except OSError as exc:
            logger.exception("Error listing files in %s", self.upload_path)
            raise PhotoStorageError("读取上传目录失败") from exc

    def delete_photos(self, file_names: Iterable[str]) -> int:
        """删除给定文件名对应的照片，不存在的文件直接跳过，返回实际删除的数量。

        整批名称先做合法性校验，任何一个非法都不会删除任何文件；
        删除过程中的 I/O 错误会中止剩余删除并抛出。
        """
        names = list(file_names)
        for name in names:
            if not is_safe_file_name(name):
                logger.warning("Rejected photo delete with unsafe file name %r", name)
                raise InvalidFileNameError(name)

        removed = 0
        try:
            for name in names:
                target = self.upload_path / name
                if target.is_file():
                    target.unlink()
                    removed += 1
                    logger.info("Deleted file: %s", name)
        except OSError as exc:
            logger.exception("Error deleting photos")
            raise PhotoStorageError("删除照片失败") from exc
        return removed

    # --------------------- helpers ---------------------
    def _scan(self) -> list[tuple[str, Path, float]]:
        if not self.upload_path.is_dir():
            return []
        entries: list[tuple[str, Path, float]] = []
        try:
            with os.scandir(self.upload_path) as it:
                for entry in it:
                    if not entry.is_file():
                        continue
                    try:
                        created = creation_time(entry.stat())
                    except FileNotFoundError:
                        # 枚举与删除并发时文件可能已被移除
                        continue
                    entries.append((entry.name, Path(entry.path), created))
        except OSError as exc:
            logger.exception("Error getting uploaded files")
            raise PhotoStorageError("读取上传目录失败") from exc
        entries.sort(key=lambda item: item[2], reverse=True)
        return entries

    def _file_data_url(self, path: Path) -> str:
        try:
            content = path.read_bytes()
        except OSError:
            logger.exception("Error reading file for thumbnail: %s", path)
            return ""
        return build_data_url(content, path.name)
