"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator
from typing import Optional

from fastapi import Header
from sqlalchemy.orm import Session

from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.db import session as db_session


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_operation_context(x_user_id: Optional[int] = Header(default=None)) -> OperationContext:
    """根据上游网关注入的 ``X-User-Id`` 构造本次请求的操作上下文。"""
    return OperationContext.from_settings(actor_id=x_user_id)
