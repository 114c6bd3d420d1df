"""部门模型：存储层级按部门（及可选的子部门）划分，目录镜像以部门目录为根。"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.physical_storage.models.base import Base, TimestampMixin


class Department(TimestampMixin, Base):
    """部门实体；子部门通过 `parent_department_id` 指向所属部门。"""

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_department_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # 相对于存储根目录的部门目录，例如 "/College of Education"
    folder_path: Mapped[str] = mapped_column(String(512), nullable=False, default="")
