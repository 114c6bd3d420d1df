"""存储单元 CRUD：按部门分区读取与计数子节点。"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.packages.physical_storage.crud.base import CRUDBase
from app.packages.physical_storage.models.storage_location import StorageLocation


class CRUDStorageLocation(CRUDBase[StorageLocation]):
    def partition_query(self, db: Session, *, department_id: int, sub_department_id: Optional[int] = None):
        """部门分区查询：指定子部门时精确匹配，否则只取主部门（子部门为空）的行。"""
        query = self.query(db).filter(StorageLocation.department_id == department_id)
        if sub_department_id is not None:
            query = query.filter(StorageLocation.sub_department_id == sub_department_id)
        else:
            query = query.filter(StorageLocation.sub_department_id.is_(None))
        return query

    def list_partition(
        self, db: Session, *, department_id: int, sub_department_id: Optional[int] = None
    ) -> list[StorageLocation]:
        query = self.partition_query(db, department_id=department_id, sub_department_id=sub_department_id)
        return query.order_by(StorageLocation.id.asc()).all()

    def count_children(self, db: Session, location_id: int) -> int:
        return (
            db.query(func.count(StorageLocation.id))
            .filter(StorageLocation.parent_id == location_id)
            .scalar()
            or 0
        )


storage_location_crud = CRUDStorageLocation(StorageLocation)
