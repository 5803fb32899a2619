"""照片上传/列表/删除的请求与响应模型。"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.packages.gallery.api.v1.schemas.common import ResponseEnvelope


class UploadedPhoto(BaseModel):
    fileName: str
    displayName: str
    thumbnailUrl: str
    uploadDate: datetime


class UploadResult(BaseModel):
    success: bool
    fileName: str


class DeletePhotosBody(BaseModel):
    fileNames: list[str] = Field(default_factory=list)


PhotoListResponse = ResponseEnvelope[list[UploadedPhoto]]
UploadResponse = ResponseEnvelope[UploadResult]
DeleteResponse = ResponseEnvelope[dict]
