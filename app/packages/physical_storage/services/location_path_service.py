"""文件位置路径：拼接“部门链 → 存储单元链”，用于展示纸质文件的完整存放位置。"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.core.constants import LOCATION_PATH_SEPARATOR
from app.packages.physical_storage.core.enums import UnitType
from app.packages.physical_storage.crud.departments import department_crud
from app.packages.physical_storage.crud.file_records import file_record_crud
from app.packages.physical_storage.crud.storage_locations import storage_location_crud
from app.packages.physical_storage.models.file_record import FileRecord
from app.packages.physical_storage.models.storage_location import StorageLocation


class LocationPathService:
    def department_path(self, db: Session, department_id: Optional[int], sub_department_id: Optional[int]) -> str:
        """从子部门（若有）向上追溯到顶级部门，例如 "College of Education → BEEd"。"""
        names: list[str] = []
        start_id = department_id
        if sub_department_id:
            sub_department = department_crud.get(db, sub_department_id)
            if sub_department is not None:
                names.append(sub_department.name)
                start_id = sub_department.parent_department_id or department_id
        names.extend(department.name for department in department_crud.list_ancestry(db, start_id))
        return LOCATION_PATH_SEPARATOR.join(reversed(names))

    def location_chain(self, db: Session, location_id: Optional[int]) -> list[StorageLocation]:
        """沿 parent_id 向上读取存储单元，返回根在前的列表。"""
        chain: list[StorageLocation] = []
        seen: set[int] = set()
        current_id = location_id
        while current_id is not None and current_id not in seen:
            seen.add(current_id)
            location = storage_location_crud.get(db, current_id)
            if location is None:
                break
            chain.append(location)
            current_id = location.parent_id
        chain.reverse()
        return chain

    def get_file_location_path(self, db: Session, file_id: int) -> Optional[dict[str, Any]]:
        file: Optional[FileRecord] = file_record_crud.get(db, file_id)
        if file is None:
            return None

        department = self.department_path(db, file.department_id, file.sub_department_id)
        chain = self.location_chain(db, file.storage_location_id)
        details: dict[str, Optional[str]] = {unit_type.value: None for unit_type in UnitType}
        for location in chain:
            details[location.unit_type] = location.unit_name

        segments = [department, *(location.unit_name for location in chain)]
        return {
            "path": LOCATION_PATH_SEPARATOR.join(segment for segment in segments if segment),
            "department": department,
            "location": chain[-1].full_path if chain else None,
            "details": details,
        }


location_path_service = LocationPathService()
