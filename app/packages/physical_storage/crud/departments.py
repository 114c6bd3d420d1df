"""部门 CRUD：层级引擎只需按 ID 读取部门及其上级链。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.crud.base import CRUDBase
from app.packages.physical_storage.models.department import Department


class CRUDDepartment(CRUDBase[Department]):
    def list_ancestry(self, db: Session, department_id: Optional[int]) -> list[Department]:
        """从给定部门沿 `parent_department_id` 向上，返回 [自身, 上级, ...]。"""
        chain: list[Department] = []
        seen: set[int] = set()
        current_id = department_id
        while current_id is not None and current_id not in seen:
            seen.add(current_id)
            department = self.get(db, current_id)
            if department is None:
                break
            chain.append(department)
            current_id = department.parent_department_id
        return chain


department_crud = CRUDDepartment(Department)
