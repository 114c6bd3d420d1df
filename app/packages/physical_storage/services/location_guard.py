"""删除守卫：集中维护“存储单元能否删除”的判定与文件解绑操作。

只检查直接子单元与直接关联文件；更深的后代要等中间层自下而上删除后才会相关。
批量删除等后续功能应复用这里的判定，而不是重新计数。
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.packages.physical_storage.core.constants import MSG_HAS_CHILDREN, MSG_HAS_FILES
from app.packages.physical_storage.core.exceptions import ConflictError
from app.packages.physical_storage.crud.file_records import file_record_crud
from app.packages.physical_storage.crud.storage_locations import storage_location_crud
from app.packages.physical_storage.models.file_record import FileRecord


class LocationGuard:
    def count_children(self, db: Session, location_id: int) -> int:
        return storage_location_crud.count_children(db, location_id)

    def count_files(self, db: Session, location_id: int) -> int:
        return file_record_crud.count_by_location(db, location_id)

    def ensure_deletable(self, db: Session, location_id: int) -> None:
        if self.count_children(db, location_id) > 0:
            raise ConflictError(MSG_HAS_CHILDREN, data={"location_id": location_id})
        if self.count_files(db, location_id) > 0:
            raise ConflictError(MSG_HAS_FILES, data={"location_id": location_id})

    def is_deletable(self, db: Session, location_id: int) -> bool:
        try:
            self.ensure_deletable(db, location_id)
        except ConflictError:
            return False
        return True

    def detach_file(self, db: Session, file: FileRecord) -> FileRecord:
        """解除文件与存储单元的关联，不影响层级本身。"""
        file.storage_location_id = None
        return file_record_crud.save(db, file)


location_guard = LocationGuard()
