"""实体存储业务包：房间 → 柜子 → 层 → 盒 → 文件夹 的层级管理与目录镜像。"""

from app.packages.types import AppPackage

from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import ensure_storage_root, init_db

package = AppPackage(
    name="physical_storage",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    create_response=create_response,
    http_exception_handler=http_exception_handler,
    generic_exception_handler=generic_exception_handler,
    startup_hooks=(init_db, ensure_storage_root),
)

__all__ = ["package", "api_router", "get_settings"]
