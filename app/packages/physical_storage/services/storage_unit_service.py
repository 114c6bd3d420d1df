"""存储单元业务逻辑：单个单元的新增、容量修改、删除与文件解绑。

新增时数据库行与镜像目录必须同时存在：先插入并 flush 拿到 ID，再创建目录，
目录创建失败则回滚整个事务。已经创建的目录不会被撤销，数据库是唯一的事实来源。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.core.constants import (
    MSG_CAPACITY_FOLDER_ONLY,
    MSG_DEPARTMENT_NOT_FOUND,
    MSG_FILE_DETACHED,
    MSG_FILE_NOT_FOUND,
    MSG_FOLDER_CREATE_FAILED,
    MSG_INVALID_CAPACITY,
    MSG_INVALID_CAPACITY_UPDATE,
    MSG_INVALID_FILE_ID,
    MSG_INVALID_INPUT,
    MSG_INVALID_LOCATION_ID,
    MSG_LOCATION_NOT_FOUND,
    MSG_PARENT_NOT_FOUND,
    MSG_UNIT_ADDED,
    MSG_UNIT_DELETED,
    MSG_UNIT_UPDATED,
    PATH_DELIMITER,
)
from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.core.enums import OperationKindEnum, UnitType
from app.packages.physical_storage.core.exceptions import (
    FilesystemError,
    NotFoundError,
    TypeMismatchError,
    ValidationError,
)
from app.packages.physical_storage.core.hierarchy import build_full_path, describe_allowed_child, validate_child
from app.packages.physical_storage.core.logger import logger
from app.packages.physical_storage.core.responses import create_result
from app.packages.physical_storage.crud.departments import department_crud
from app.packages.physical_storage.crud.file_records import file_record_crud
from app.packages.physical_storage.crud.storage_locations import storage_location_crud
from app.packages.physical_storage.models.storage_location import StorageLocation
from app.packages.physical_storage.services.audit_service import TransactionLogger, transaction_logger
from app.packages.physical_storage.services.directory_mirror import DirectoryMirror
from app.packages.physical_storage.services.location_guard import LocationGuard, location_guard
from app.packages.physical_storage.services.transactions import run_in_transaction

_MAX_NAME_LENGTH = 255
_RESERVED_NAMES = {".", ".."}


def parse_positive_int(value: Any) -> Optional[int]:
    """把表单/JSON 中的 ID 或数量解析为正整数；空值返回 ``None``，非法值抛出 ``ValueError``。"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        number = int(value.strip())
    else:
        raise ValueError(value)
    if number <= 0:
        raise ValueError(value)
    return number


def clean_unit_name(value: Any) -> str:
    """去除首尾空白；非字符串视为空名称。"""
    if not isinstance(value, str):
        return ""
    return value.strip()


@dataclass(frozen=True)
class UnitDraft:
    """校验通过、待写入的存储单元。"""

    department_id: int
    sub_department_id: Optional[int]
    parent_id: Optional[int]
    unit_type: UnitType
    unit_name: str
    folder_capacity: int


class StorageUnitService:
    def __init__(
        self,
        audit: TransactionLogger = transaction_logger,
        guard: LocationGuard = location_guard,
    ) -> None:
        self.audit = audit
        self.guard = guard

    # ------------------------------------------
    # 输入校验与单元写入（供批量创建复用）
    # ------------------------------------------

    def normalize(self, data: Mapping[str, Any]) -> UnitDraft:
        """校验调用方输入，返回 ``UnitDraft``；任何不合法都抛出 ``ValidationError``。"""
        try:
            department_id = parse_positive_int(data.get("department_id"))
            sub_department_id = parse_positive_int(data.get("sub_department_id"))
            parent_id = parse_positive_int(data.get("parent_id"))
        except ValueError as exc:
            raise ValidationError(MSG_INVALID_INPUT) from exc

        unit_type = UnitType.parse(data.get("unit_type"))
        unit_name = clean_unit_name(data.get("unit_name"))
        if department_id is None or unit_type is None or not unit_name:
            raise ValidationError(MSG_INVALID_INPUT)
        if (
            len(unit_name) > _MAX_NAME_LENGTH
            or PATH_DELIMITER in unit_name
            or "\\" in unit_name
            or unit_name in _RESERVED_NAMES
            or any(not char.isprintable() for char in unit_name)
        ):
            raise ValidationError(MSG_INVALID_INPUT)

        folder_capacity = 0
        if unit_type is UnitType.FOLDER:
            try:
                folder_capacity = parse_positive_int(data.get("folder_capacity")) or 0
            except ValueError:
                folder_capacity = 0
            if folder_capacity <= 0:
                raise ValidationError(MSG_INVALID_CAPACITY)

        return UnitDraft(
            department_id=department_id,
            sub_department_id=sub_department_id,
            parent_id=parent_id,
            unit_type=unit_type,
            unit_name=unit_name,
            folder_capacity=folder_capacity,
        )

    def insert_unit(
        self,
        db: Session,
        ctx: OperationContext,
        draft: UnitDraft,
        *,
        enforce_order: bool = True,
    ) -> StorageLocation:
        """在当前事务中插入一行并创建镜像目录，不提交。

        ``enforce_order=False`` 仅供批量创建使用：批量链路中跳过的层级不做父子类型校验。
        """
        department = department_crud.get(db, draft.department_id)
        if department is None:
            raise NotFoundError(MSG_DEPARTMENT_NOT_FOUND)

        parent_path: Optional[str] = None
        if draft.parent_id is not None:
            parent = storage_location_crud.get(db, draft.parent_id)
            if parent is None:
                raise NotFoundError(MSG_PARENT_NOT_FOUND)
            if enforce_order and not validate_child(parent.type, draft.unit_type):
                raise TypeMismatchError(
                    describe_allowed_child(parent.type),
                    data={"parent_type": parent.unit_type, "unit_type": draft.unit_type.value},
                )
            parent_path = parent.full_path

        full_path = build_full_path(parent_path, draft.unit_name)
        location = storage_location_crud.create(
            db,
            {
                "department_id": draft.department_id,
                "sub_department_id": draft.sub_department_id,
                "parent_id": draft.parent_id,
                "unit_name": draft.unit_name,
                "unit_type": draft.unit_type.value,
                "folder_capacity": draft.folder_capacity,
                "full_path": full_path,
            },
        )

        mirror = DirectoryMirror(ctx.base_dir)
        try:
            mirror.ensure_directory(mirror.resolve(department.folder_path, full_path))
        except (OSError, ValueError) as exc:
            logger.error("Failed to create directory for storage unit %r: %s", full_path, exc)
            raise FilesystemError(MSG_FOLDER_CREATE_FAILED) from exc
        return location

    # ------------------------------------------
    # 对外写操作：均返回 {success, message, id?}
    # ------------------------------------------

    def create_unit(self, db: Session, ctx: OperationContext, data: Mapping[str, Any]) -> dict[str, Any]:
        def operation():
            draft = self.normalize(data)
            location = self.insert_unit(db, ctx, draft)
            result = create_result(True, MSG_UNIT_ADDED, id=location.id, full_path=location.full_path)
            return result, f"Storage unit {draft.unit_name} added successfully."

        return run_in_transaction(db, ctx, OperationKindEnum.ADD_UNIT, operation, audit=self.audit)

    def update_capacity(
        self, db: Session, ctx: OperationContext, location_id: Any, new_capacity: Any
    ) -> dict[str, Any]:
        """只修改 folder_capacity；不触碰 full_path，也不触碰文件系统。"""

        def operation():
            try:
                target_id = parse_positive_int(location_id)
                capacity = parse_positive_int(new_capacity)
            except ValueError as exc:
                raise ValidationError(MSG_INVALID_CAPACITY_UPDATE) from exc
            if target_id is None or capacity is None:
                raise ValidationError(MSG_INVALID_CAPACITY_UPDATE)

            location = storage_location_crud.get(db, target_id)
            if location is None:
                raise NotFoundError(MSG_LOCATION_NOT_FOUND)
            if location.type is not UnitType.FOLDER:
                raise ValidationError(MSG_CAPACITY_FOLDER_ONLY)

            location.folder_capacity = capacity
            storage_location_crud.save(db, location)
            result = create_result(True, MSG_UNIT_UPDATED, id=target_id)
            return result, f"Storage unit {target_id} updated successfully."

        return run_in_transaction(db, ctx, OperationKindEnum.EDIT_UNIT, operation, audit=self.audit)

    def delete_unit(self, db: Session, ctx: OperationContext, location_id: Any) -> dict[str, Any]:
        """仅允许删除没有子单元、没有关联文件的单元；镜像目录保留在磁盘上。"""

        def operation():
            try:
                target_id = parse_positive_int(location_id)
            except ValueError as exc:
                raise ValidationError(MSG_INVALID_LOCATION_ID) from exc
            if target_id is None:
                raise ValidationError(MSG_INVALID_LOCATION_ID)

            location = storage_location_crud.get(db, target_id)
            if location is None:
                raise NotFoundError(MSG_LOCATION_NOT_FOUND)
            self.guard.ensure_deletable(db, target_id)

            storage_location_crud.hard_delete(db, location)
            result = create_result(True, MSG_UNIT_DELETED, id=target_id)
            return result, f"Storage unit {target_id} deleted successfully."

        return run_in_transaction(db, ctx, OperationKindEnum.DELETE_UNIT, operation, audit=self.audit)

    def remove_file_association(self, db: Session, ctx: OperationContext, file_id: Any) -> dict[str, Any]:
        def operation():
            try:
                target_id = parse_positive_int(file_id)
            except ValueError as exc:
                raise ValidationError(MSG_INVALID_FILE_ID) from exc
            if target_id is None:
                raise ValidationError(MSG_INVALID_FILE_ID)

            file = file_record_crud.get(db, target_id)
            if file is None:
                raise NotFoundError(MSG_FILE_NOT_FOUND)
            self.guard.detach_file(db, file)
            result = create_result(True, MSG_FILE_DETACHED, id=target_id)
            return result, f"File {target_id} removed from storage successfully."

        return run_in_transaction(db, ctx, OperationKindEnum.REMOVE_FILE, operation, audit=self.audit)


storage_unit_service = StorageUnitService()
