"""存储单元路由定义：层级树查询与单元增删改。"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.physical_storage.api.v1.schemas.storage_locations import (
    CapacityUpdateRequest,
    FileLocationPathResponse,
    HierarchyCreateRequest,
    LocationFilesResponse,
    LocationSearchResponse,
    LocationTreeResponse,
    StorageUnitCreateRequest,
    WriteResponse,
)
from app.packages.physical_storage.core.config import get_settings
from app.packages.physical_storage.core.constants import HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK, MSG_FILE_NOT_FOUND
from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.core.dependencies import get_db, get_operation_context
from app.packages.physical_storage.core.exceptions import AppException
from app.packages.physical_storage.core.responses import create_response
from app.packages.physical_storage.services.hierarchy_service import hierarchy_service
from app.packages.physical_storage.services.location_path_service import location_path_service
from app.packages.physical_storage.services.storage_unit_service import storage_unit_service
from app.packages.physical_storage.services.tree_service import tree_service

router = APIRouter(prefix="/storage-locations", tags=["storage-locations"])


def _respond(result: dict[str, Any]) -> dict[str, Any]:
    """成功结果包装为统一信封；失败结果按其状态码抛出，由全局处理器输出。"""
    if not result["success"]:
        raise AppException(result["message"], result["code"], data=result)
    return create_response(result["message"], result, HTTP_STATUS_OK)


@router.get("/tree", response_model=LocationTreeResponse)
def get_location_tree(
    department_id: int = Query(..., gt=0),
    sub_department_id: Optional[int] = Query(default=None, gt=0),
    db: Session = Depends(get_db),
) -> LocationTreeResponse:
    """返回部门（或子部门）分区内的存储单元树，附带文件数量与面包屑。"""
    forest = tree_service.build_tree(db, department_id, sub_department_id)
    data = forest.to_nested(get_settings().breadcrumb_depth)
    return create_response("Storage tree loaded.", data, HTTP_STATUS_OK)


@router.get("/search", response_model=LocationSearchResponse)
def search_locations(
    department_id: int = Query(..., gt=0),
    term: str = Query(default=""),
    sub_department_id: Optional[int] = Query(default=None, gt=0),
    db: Session = Depends(get_db),
) -> LocationSearchResponse:
    data = tree_service.search_locations(db, department_id, sub_department_id, term)
    return create_response("Search completed.", data, HTTP_STATUS_OK)


@router.get("/{location_id}/files", response_model=LocationFilesResponse)
def list_location_files(location_id: int, db: Session = Depends(get_db)) -> LocationFilesResponse:
    data = tree_service.list_files_at(db, location_id)
    return create_response("Files loaded.", data, HTTP_STATUS_OK)


@router.get("/files/{file_id}/path", response_model=FileLocationPathResponse)
def get_file_location_path(file_id: int, db: Session = Depends(get_db)) -> FileLocationPathResponse:
    """返回纸质文件的完整存放位置（部门链 + 存储单元链）。"""
    data = location_path_service.get_file_location_path(db, file_id)
    if data is None:
        raise AppException(MSG_FILE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
    return create_response("File location loaded.", data, HTTP_STATUS_OK)


@router.post("", response_model=WriteResponse)
def create_storage_unit(
    payload: StorageUnitCreateRequest,
    db: Session = Depends(get_db),
    ctx: OperationContext = Depends(get_operation_context),
) -> WriteResponse:
    return _respond(storage_unit_service.create_unit(db, ctx, payload.model_dump()))


@router.post("/hierarchy", response_model=WriteResponse)
def create_storage_hierarchy(
    payload: HierarchyCreateRequest,
    db: Session = Depends(get_db),
    ctx: OperationContext = Depends(get_operation_context),
) -> WriteResponse:
    return _respond(hierarchy_service.add_full_hierarchy(db, ctx, payload.model_dump()))


@router.patch("/{location_id}/capacity", response_model=WriteResponse)
def update_folder_capacity(
    location_id: int,
    payload: CapacityUpdateRequest,
    db: Session = Depends(get_db),
    ctx: OperationContext = Depends(get_operation_context),
) -> WriteResponse:
    return _respond(storage_unit_service.update_capacity(db, ctx, location_id, payload.folder_capacity))


@router.delete("/files/{file_id}/location", response_model=WriteResponse)
def remove_file_from_location(
    file_id: int,
    db: Session = Depends(get_db),
    ctx: OperationContext = Depends(get_operation_context),
) -> WriteResponse:
    return _respond(storage_unit_service.remove_file_association(db, ctx, file_id))


@router.delete("/{location_id}", response_model=WriteResponse)
def delete_storage_unit(
    location_id: int,
    db: Session = Depends(get_db),
    ctx: OperationContext = Depends(get_operation_context),
) -> WriteResponse:
    return _respond(storage_unit_service.delete_unit(db, ctx, location_id))
