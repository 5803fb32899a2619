"""服务端渲染页面：账号登录/注册、照片上传与照片管理。

表单提交后统一 303 重定向，避免刷新页面重复提交。
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.packages.gallery.core.dependencies import (
    CurrentSession,
    get_db,
    get_optional_session,
    get_optional_user,
    get_photo_delete_service,
    get_photo_upload_service,
)
from app.packages.gallery.core.exceptions import AppException, PhotoStorageError, UploadTooLargeError
from app.packages.gallery.core.security import clear_auth_cookie, set_auth_cookie
from app.packages.gallery.models.user import User
from app.packages.gallery.services.auth_service import auth_service
from app.packages.gallery.services.photo_delete_service import PhotoDeleteService
from app.packages.gallery.services.photo_upload_service import PhotoUploadService
from app.packages.gallery.services.placeholder import get_placeholder_data_url
from app.packages.gallery.web.templating import templates

router = APIRouter(include_in_schema=False)

SEE_OTHER = 303


def _login_redirect(next_path: str) -> RedirectResponse:
    return RedirectResponse(f"/account/login?next={quote(next_path)}", status_code=SEE_OTHER)


def _safe_next(next_path: Optional[str]) -> str:
    # 仅允许站内相对路径，防止开放重定向
    if next_path and next_path.startswith("/") and not next_path.startswith("//"):
        return next_path
    return "/photos/manage"


@router.get("/")
def home(request: Request, user: Optional[User] = Depends(get_optional_user)):
    return templates.TemplateResponse(request, "home.html", {"user": user})


# ----------------------------- 账号 -----------------------------
@router.get("/account/login")
def login_page(request: Request, next: Optional[str] = None, registered: bool = False):
    return templates.TemplateResponse(
        request,
        "login.html",
        {"user": None, "next": _safe_next(next), "registered": registered, "error": None},
    )


@router.post("/account/login")
def login_submit(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    next: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    try:
        token = auth_service.authenticate(db, username=username, password=password)
    except AppException as exc:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"user": None, "next": _safe_next(next), "registered": False, "error": exc.detail, "username": username},
            status_code=exc.status_code,
        )
    response = RedirectResponse(_safe_next(next), status_code=SEE_OTHER)
    set_auth_cookie(response, token)
    return response


@router.get("/account/register")
def register_page(request: Request):
    return templates.TemplateResponse(request, "register.html", {"user": None, "error": None})


@router.post("/account/register")
def register_submit(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    email: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    try:
        auth_service.register_user(db, username=username, password=password, email=email)
    except AppException as exc:
        return templates.TemplateResponse(
            request,
            "register.html",
            {"user": None, "error": exc.detail, "username": username, "email": email},
            status_code=exc.status_code,
        )
    return RedirectResponse("/account/login?registered=true", status_code=SEE_OTHER)


@router.post("/account/logout")
def logout_submit(current: Optional[CurrentSession] = Depends(get_optional_session)):
    if current is not None:
        auth_service.logout(current.session_id)
    response = RedirectResponse("/", status_code=SEE_OTHER)
    clear_auth_cookie(response)
    return response


# ----------------------------- 照片 -----------------------------
@router.get("/photos/upload")
def upload_page(request: Request, user: Optional[User] = Depends(get_optional_user)):
    if user is None:
        return _login_redirect("/photos/upload")
    return templates.TemplateResponse(request, "upload.html", {"user": user, "message": None, "error": None})


@router.post("/photos/upload")
def upload_submit(
    request: Request,
    photo: UploadFile = File(...),
    user: Optional[User] = Depends(get_optional_user),
    service: PhotoUploadService = Depends(get_photo_upload_service),
):
    if user is None:
        return _login_redirect("/photos/upload")

    context = {"user": user, "message": None, "error": None}
    status_code = 200
    try:
        service.upload_photo(photo.filename or "", photo.file)
        context["message"] = f"“{photo.filename}” 上传成功"
    except UploadTooLargeError as exc:
        context["error"] = f"上传失败：{exc.detail}"
        status_code = exc.status_code
    except PhotoStorageError as exc:
        context["error"] = "上传失败，请稍后重试"
        status_code = exc.status_code
    return templates.TemplateResponse(request, "upload.html", context, status_code=status_code)


@router.get("/photos/manage")
def manage_page(
    request: Request,
    deleted: Optional[int] = None,
    user: Optional[User] = Depends(get_optional_user),
    service: PhotoDeleteService = Depends(get_photo_delete_service),
):
    if user is None:
        return _login_redirect("/photos/manage")
    return _render_manage(request, user, service, deleted=deleted)


@router.post("/photos/manage/delete")
def manage_delete(
    request: Request,
    file_names: list[str] = Form(default=[]),
    user: Optional[User] = Depends(get_optional_user),
    service: PhotoDeleteService = Depends(get_photo_delete_service),
):
    if user is None:
        return _login_redirect("/photos/manage")
    try:
        removed = service.delete_photos(file_names)
    except AppException as exc:
        return _render_manage(request, user, service, error=exc.detail, status_code=exc.status_code)
    return RedirectResponse(f"/photos/manage?deleted={removed}", status_code=SEE_OTHER)


def _render_manage(
    request: Request,
    user: User,
    service: PhotoDeleteService,
    *,
    deleted: Optional[int] = None,
    error: Optional[str] = None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "manage.html",
        {
            "user": user,
            "photos": service.get_uploaded_files(),
            "placeholder_url": get_placeholder_data_url(),
            "deleted": deleted,
            "error": error,
        },
        status_code=status_code,
    )
