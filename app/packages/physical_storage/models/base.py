"""模型基类：声明式基类（带约束命名规则）与创建/更新时间戳。"""

from datetime import datetime

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# 约束名固定下来，SQLite 与 PostgreSQL 上生成的名称一致
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _timestamp_column(*, refresh_on_update: bool = False) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now() if refresh_on_update else None,
        nullable=False,
    )


class TimestampMixin:
    """存储单元、部门与文件记录共用的时间戳列。"""

    create_time: Mapped[datetime] = _timestamp_column()
    update_time: Mapped[datetime] = _timestamp_column(refresh_on_update=True)
