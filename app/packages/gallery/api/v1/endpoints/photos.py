"""照片管理路由：上传、带缩略图的列表与批量删除。

列表公开访问；上传与删除需要登录（Cookie 或 Bearer 均可）。
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from app.packages.gallery.api.v1.schemas.photos import (
    DeletePhotosBody,
    DeleteResponse,
    PhotoListResponse,
    UploadResponse,
)
from app.packages.gallery.core.constants import HTTP_STATUS_OK
from app.packages.gallery.core.dependencies import (
    get_current_active_user,
    get_photo_delete_service,
    get_photo_upload_service,
)
from app.packages.gallery.core.responses import create_response
from app.packages.gallery.models.user import User
from app.packages.gallery.services.photo_delete_service import PhotoDeleteService
from app.packages.gallery.services.photo_upload_service import PhotoUploadService

router = APIRouter(prefix="/photos", tags=["photos"])


@router.get("", response_model=PhotoListResponse)
def list_photos(service: PhotoDeleteService = Depends(get_photo_delete_service)):
    photos = [info.to_dict() for info in service.get_uploaded_files()]
    return create_response("OK", photos, HTTP_STATUS_OK)


@router.post("", response_model=UploadResponse)
def upload_photo(
    file: UploadFile = File(...),
    service: PhotoUploadService = Depends(get_photo_upload_service),
    _: User = Depends(get_current_active_user),
):
    stored_name = service.save_photo(file.filename or "", file.file)
    return create_response("上传成功", {"success": True, "fileName": stored_name}, HTTP_STATUS_OK)


@router.delete("", response_model=DeleteResponse)
def delete_photos(
    payload: DeletePhotosBody,
    service: PhotoDeleteService = Depends(get_photo_delete_service),
    _: User = Depends(get_current_active_user),
):
    removed = service.delete_photos(payload.fileNames)
    return create_response("删除完成", {"requested": len(payload.fileNames), "deleted": removed}, HTTP_STATUS_OK)
