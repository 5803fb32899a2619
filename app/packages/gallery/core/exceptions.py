"""异常处理模块：定义统一的业务异常与响应格式。"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.gallery.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_ERROR,
    HTTP_STATUS_PAYLOAD_TOO_LARGE,
)
from app.packages.gallery.core.logger import get_request_id, logger


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class PhotoStorageError(AppException):
    """写入、枚举或删除上传目录时发生的 I/O 错误。"""

    def __init__(self, msg: str = "照片存储读写失败", data=None) -> None:
        super().__init__(msg, HTTP_STATUS_INTERNAL_ERROR, data)


class UploadTooLargeError(AppException):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"文件超过大小上限（{max_bytes} 字节）", HTTP_STATUS_PAYLOAD_TOO_LARGE, {"max_bytes": max_bytes})
        self.max_bytes = max_bytes


class InvalidFileNameError(AppException):
    def __init__(self, file_name: str) -> None:
        super().__init__("非法文件名", HTTP_STATUS_BAD_REQUEST, {"file_name": file_name})
        self.file_name = file_name


class ConfigurationError(RuntimeError):
    """启动阶段的致命配置错误（例如缺少默认占位图）。"""


def _wants_html(request: Request) -> bool:
    if request.url.path.startswith("/api"):
        return False
    return "text/html" in request.headers.get("accept", "")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception):  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构，页面请求渲染错误页。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    if _wants_html(request):
        from app.packages.gallery.web.templating import templates

        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": "处理请求时发生错误，请稍后重试。", "request_id": get_request_id()},
            status_code=HTTP_STATUS_INTERNAL_ERROR,
        )
    payload = {
        "msg": "服务器内部错误",
        "data": {"request_id": get_request_id()},
        "code": HTTP_STATUS_INTERNAL_ERROR,
    }
    return JSONResponse(status_code=HTTP_STATUS_INTERNAL_ERROR, content=payload)
