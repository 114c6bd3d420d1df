"""文件记录 CRUD：按存储单元统计与列出文件。"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.packages.physical_storage.crud.base import CRUDBase
from app.packages.physical_storage.models.file_record import FileRecord


class CRUDFileRecord(CRUDBase[FileRecord]):
    def list_by_location(self, db: Session, location_id: int) -> list[FileRecord]:
        return (
            self.query(db)
            .filter(FileRecord.storage_location_id == location_id)
            .order_by(FileRecord.id.asc())
            .all()
        )

    def count_by_location(self, db: Session, location_id: int) -> int:
        return (
            db.query(func.count(FileRecord.id))
            .filter(FileRecord.storage_location_id == location_id)
            .scalar()
            or 0
        )

    def count_by_locations(self, db: Session, location_ids: Iterable[int]) -> dict[int, int]:
        """批量统计：一次分组查询返回 {存储单元 ID: 文件数}，没有文件的单元不出现。"""
        ids = {int(i) for i in location_ids}
        if not ids:
            return {}
        rows = (
            db.query(FileRecord.storage_location_id, func.count(FileRecord.id))
            .filter(FileRecord.storage_location_id.in_(ids))
            .group_by(FileRecord.storage_location_id)
            .all()
        )
        return {location_id: count for location_id, count in rows}


file_record_crud = CRUDFileRecord(FileRecord)
