"""简易文件列表接口：直接返回上传目录中的文件名数组（不含缩略图，不走统一响应结构）。"""

from fastapi import APIRouter, Depends

from app.packages.gallery.core.dependencies import get_photo_delete_service
from app.packages.gallery.services.photo_delete_service import PhotoDeleteService

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/listfiles", response_model=list[str])
def list_files(service: PhotoDeleteService = Depends(get_photo_delete_service)) -> list[str]:
    return service.list_file_names()
