"""批量层级创建：一次提交 room → folder 各级名称，在同一事务内逐级创建。"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.core.config import get_settings
from app.packages.physical_storage.core.constants import MSG_HIERARCHY_ADDED, MSG_NO_UNIT_NAMES
from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.core.enums import OperationKindEnum, UnitType
from app.packages.physical_storage.core.exceptions import ValidationError
from app.packages.physical_storage.core.responses import create_result
from app.packages.physical_storage.services.storage_unit_service import (
    StorageUnitService,
    clean_unit_name,
    storage_unit_service,
)
from app.packages.physical_storage.services.transactions import run_in_transaction

RANK_FIELDS: tuple[tuple[UnitType, str], ...] = tuple((unit_type, f"{unit_type.value}_name") for unit_type in UnitType)


class HierarchyService:
    """把多次单元创建组合为一个原子链路。

    空名称的层级直接跳过，下一级挂到本次调用最近创建的单元下；
    因此 room + folder 会得到 folder 直接挂在 room 下的两行数据，
    被跳过的中间层级不参与父子类型校验。
    任意一级失败都会回滚本次调用已创建的全部层级（已创建的目录保留）。
    整条链路只写一条 add_hierarchy 审计记录，描述中逐级列出类型、名称与新行 ID，
    不会像逐个调用 create_unit 那样每级各写一条。
    """

    def __init__(self, units: StorageUnitService = storage_unit_service) -> None:
        self.units = units

    def add_full_hierarchy(self, db: Session, ctx: OperationContext, data: Mapping[str, Any]) -> dict[str, Any]:
        def operation():
            submitted = [
                (unit_type, clean_unit_name(data.get(field)))
                for unit_type, field in RANK_FIELDS
                if clean_unit_name(data.get(field))
            ]
            if not submitted:
                raise ValidationError(MSG_NO_UNIT_NAMES)

            folder_capacity = data.get("folder_capacity")
            if folder_capacity is None or (isinstance(folder_capacity, str) and not folder_capacity.strip()):
                folder_capacity = get_settings().default_folder_capacity

            parent_id: Optional[int] = None
            created_ids: list[int] = []
            for unit_type, unit_name in submitted:
                draft = self.units.normalize(
                    {
                        "department_id": data.get("department_id"),
                        "sub_department_id": data.get("sub_department_id"),
                        "parent_id": parent_id,
                        "unit_type": unit_type,
                        "unit_name": unit_name,
                        "folder_capacity": folder_capacity if unit_type is UnitType.FOLDER else 0,
                    }
                )
                location = self.units.insert_unit(db, ctx, draft, enforce_order=False)
                parent_id = location.id
                created_ids.append(location.id)

            levels = ", ".join(
                f"{unit_type.value} {unit_name} (#{location_id})"
                for (unit_type, unit_name), location_id in zip(submitted, created_ids)
            )
            result = create_result(True, MSG_HIERARCHY_ADDED, id=parent_id, created_ids=created_ids)
            return result, f"Storage hierarchy added successfully: {levels}."

        return run_in_transaction(db, ctx, OperationKindEnum.ADD_HIERARCHY, operation, audit=self.units.audit)


hierarchy_service = HierarchyService()
