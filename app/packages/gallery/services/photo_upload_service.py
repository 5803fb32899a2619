"""照片上传服务：把浏览器提交的文件流写入上传目录。"""

from __future__ import annotations

import uuid
from pathlib import Path, PurePath
from typing import BinaryIO

from app.packages.gallery.core.config import PhotoUploadConfiguration
from app.packages.gallery.core.constants import UPLOAD_CHUNK_SIZE
from app.packages.gallery.core.exceptions import PhotoStorageError, UploadTooLargeError
from app.packages.gallery.core.logger import logger


class PhotoUploadService:
    """以随机文件名保存上传的照片。

    - 目标目录不存在时递归创建；
    - 新文件名为 ``<uuid4 hex><原始扩展名>``，不检查碰撞，碰撞时以独占模式创建失败而不覆盖；
    - 写入字节数超过上限时抛出 ``UploadTooLargeError``，并删除已写入的半截文件；
    - 其它 I/O 或读流错误记录日志后以 ``PhotoStorageError`` 抛出。
    """

    def __init__(self, config: PhotoUploadConfiguration) -> None:
        self.upload_path = Path(config.upload_path)
        self.max_upload_bytes = config.max_upload_bytes

    def upload_photo(self, file_name: str, stream: BinaryIO) -> bool:
        self.save_photo(file_name, stream)
        return True

    def save_photo(self, file_name: str, stream: BinaryIO) -> str:
        """保存照片并返回生成的文件名。"""
        stored_name = self.generate_file_name(file_name)
        target = self.upload_path / stored_name
        try:
            self.upload_path.mkdir(parents=True, exist_ok=True)
            written = self._copy_limited(stream, target)
        except UploadTooLargeError:
            logger.error("Error uploading photo %r: exceeds %s bytes", file_name, self.max_upload_bytes)
            raise
        except (OSError, ValueError) as exc:
            logger.exception("Error uploading photo %r", file_name)
            raise PhotoStorageError("照片上传失败") from exc

        logger.info("Uploaded photo %r as %s (%s bytes)", file_name, stored_name, written)
        return stored_name

    @staticmethod
    def generate_file_name(original_name: str) -> str:
        extension = PurePath(original_name or "").suffix
        # 生成的文件名必须能通过删除时的文件名校验
        if "\x00" in extension or "\\" in extension:
            extension = ""
        return f"{uuid.uuid4().hex}{extension}"

    def _copy_limited(self, stream: BinaryIO, target: Path) -> int:
        written = 0
        # 只清理本次创建的文件；独占创建失败时目标属于其它上传
        fh = open(target, "xb")
        try:
            with fh:
                while True:
                    chunk = stream.read(UPLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_upload_bytes:
                        raise UploadTooLargeError(self.max_upload_bytes)
                    fh.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise
        return written
