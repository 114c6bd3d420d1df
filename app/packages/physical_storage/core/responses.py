"""响应封装：构建接口信封与写操作的统一结果结构。"""

from typing import Any, Optional

from app.packages.physical_storage.core.constants import HTTP_STATUS_OK


def create_response(msg: str, data: Any = None, code: int = HTTP_STATUS_OK) -> dict[str, Any]:
    """按照 ``msg``、``data``、``code`` 组合出统一响应体。"""
    return {"msg": msg, "data": data, "code": code}


def create_result(
    success: bool,
    message: str,
    *,
    id: Optional[int] = None,
    code: int = HTTP_STATUS_OK,
    **extra: Any,
) -> dict[str, Any]:
    """写操作的统一返回值：``success``、``message``，成功时可附带 ``id``。"""
    result: dict[str, Any] = {"success": success, "message": message, "code": code}
    if id is not None:
        result["id"] = id
    result.update(extra)
    return result
