"""照片相册业务包：账号认证 + 持久化卷上的照片上传、列表与删除。"""

from app.packages.types import AppPackage

from .api.listing import router as listing_router
from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db
from .services.placeholder import load_placeholder
from .web.routes import router as web_router
from .web.templating import STATIC_DIR

package = AppPackage(
    name="gallery",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_db=init_db,
    create_response=create_response,
    http_exception_handler=http_exception_handler,
    generic_exception_handler=generic_exception_handler,
    root_routers=(listing_router, web_router),
    static_dir=STATIC_DIR,
    startup_checks=(load_placeholder,),
)

__all__ = ["package", "api_router", "get_settings"]
