"""Jinja2 模板环境：页面路由与错误页共用。"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.packages.gallery.core.config import get_settings
from app.packages.gallery.core.timezone import format_datetime

WEB_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["datetime"] = format_datetime
templates.env.globals["project_name"] = get_settings().project_name
