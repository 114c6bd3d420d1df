"""层级规则：单元类型的先后顺序、合法子类型判断以及 full_path 计算。

五种类型按 room → cabinet → layer → box → folder 严格排序，folder 为末级。
这里的函数都是纯函数，不访问数据库也不访问文件系统。
"""

from __future__ import annotations

from typing import Optional

from app.packages.physical_storage.core.constants import PATH_DELIMITER
from app.packages.physical_storage.core.enums import UnitType

_ORDER: tuple[UnitType, ...] = tuple(UnitType)


def next_type(unit_type: UnitType) -> Optional[UnitType]:
    """返回紧随其后的下一级类型；folder 没有下一级，返回 ``None``。"""
    position = _ORDER.index(UnitType(unit_type))
    if position + 1 >= len(_ORDER):
        return None
    return _ORDER[position + 1]


def validate_child(parent_type: UnitType, child_type: UnitType) -> bool:
    """子类型必须恰好是父类型的下一级：不允许跳级、同级或倒序。"""
    return next_type(parent_type) == UnitType(child_type)


def suggest_child_type(parent_type: Optional[UnitType] = None) -> Optional[UnitType]:
    """给调用方的建议类型：无父节点时建议 room（仅建议，不做强制）。"""
    if parent_type is None:
        return UnitType.ROOM
    return next_type(parent_type)


def describe_allowed_child(parent_type: UnitType) -> str:
    """生成类型不匹配时的提示文案，点名唯一合法的子类型。"""
    parent = UnitType(parent_type)
    allowed = next_type(parent)
    if allowed is None:
        return f"A {parent.value} cannot contain child units."
    return f"A {parent.value} can only contain {allowed.value} units."


def build_full_path(parent_path: Optional[str], unit_name: str) -> str:
    """拼接完整路径：有父节点时为 ``父路径/名称``，根节点即名称本身。"""
    if parent_path is not None:
        return f"{parent_path}{PATH_DELIMITER}{unit_name}"
    return unit_name
