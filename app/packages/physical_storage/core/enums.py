"""枚举定义：存储单元类型与审计日志的取值约束。"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class UnitType(str, Enum):
    """存储单元类型，声明顺序即从大到小的层级顺序。"""

    ROOM = "room"
    CABINET = "cabinet"
    LAYER = "layer"
    BOX = "box"
    FOLDER = "folder"

    @property
    def rank(self) -> int:
        return list(UnitType).index(self)

    @classmethod
    def parse(cls, value: object) -> Optional["UnitType"]:
        """宽松解析：忽略大小写与首尾空白，无法识别时返回 ``None``。"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class TransactionStatusEnum(str, Enum):
    """审计记录的结果状态。"""

    SUCCESS = "success"
    FAILURE = "failure"


class OperationKindEnum(str, Enum):
    """审计记录的操作类型。"""

    ADD_UNIT = "add_unit"
    ADD_HIERARCHY = "add_hierarchy"
    EDIT_UNIT = "edit_unit"
    DELETE_UNIT = "delete_unit"
    REMOVE_FILE = "remove_file"
