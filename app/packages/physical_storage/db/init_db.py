"""启动引导：确保数据库表结构与目录镜像根目录存在。"""

from __future__ import annotations

import logging
from pathlib import Path

from app.packages.physical_storage.core.config import get_settings
from app.packages.physical_storage.db import session as db_session
from app.packages.physical_storage.models import Base

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all database tables if they do not exist."""
    Base.metadata.create_all(bind=db_session.engine)
    logger.debug("Database schema ensured for %s tables", len(Base.metadata.tables))


def ensure_storage_root() -> Path:
    """创建目录镜像根目录；部门目录与单元目录在写入单元时按需创建。"""
    root = get_settings().storage_base_path
    root.mkdir(parents=True, exist_ok=True)
    logger.info("Storage mirror root: %s", root)
    return root
