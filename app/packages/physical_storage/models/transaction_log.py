"""审计日志模型：记录存储层级每一次写操作的结果。"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.physical_storage.models.base import Base


class TransactionLog(Base):
    """(操作人, 状态, 操作类型, 描述) 四元组；只追加，不修改。"""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    transaction_type: Mapped[str] = mapped_column(String(32), index=True)
    transaction_status: Mapped[str] = mapped_column(String(16))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transaction_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
