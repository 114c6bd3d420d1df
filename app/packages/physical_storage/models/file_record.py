"""文件记录模型：仅保留层级引擎需要的字段（所在存储单元）。"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.physical_storage.models.base import Base, TimestampMixin


class FileRecord(TimestampMixin, Base):
    __tablename__ = "files"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    department_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("departments.id"), nullable=True, index=True
    )
    sub_department_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("departments.id"), nullable=True, index=True
    )
    storage_location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("storage_locations.id"), nullable=True, index=True
    )
