"""存储单元模型：房间、柜子、层、盒、文件夹五级邻接表。

- `parent_id` 只是普通外键，不声明 ORM relationship，树结构在读取时重新组装；
- `full_path` 在创建时计算并固化，之后不可修改；
- `folder_capacity` 只对 folder 有意义，其余类型固定为 0。
"""

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.physical_storage.core.enums import UnitType
from app.packages.physical_storage.models.base import Base, TimestampMixin

_UNIT_TYPES_SQL = ", ".join(f"'{item.value}'" for item in UnitType)


class StorageLocation(TimestampMixin, Base):
    __tablename__ = "storage_locations"
    __table_args__ = (
        CheckConstraint(f"unit_type IN ({_UNIT_TYPES_SQL})", name="unit_type"),
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="no_self_parent"),
        CheckConstraint("folder_capacity >= 0", name="folder_capacity"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("departments.id"), nullable=False, index=True
    )
    sub_department_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("departments.id"), nullable=True, index=True
    )
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("storage_locations.id"), nullable=True, index=True
    )
    unit_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_type: Mapped[str] = mapped_column(String(16), nullable=False)
    folder_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    full_path: Mapped[str] = mapped_column(String(1024), nullable=False)

    @property
    def type(self) -> UnitType:
        return UnitType(self.unit_type)
