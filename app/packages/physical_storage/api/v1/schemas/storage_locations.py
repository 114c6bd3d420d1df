"""存储单元相关的请求与响应模型。

请求模型只做类型层面的转换，业务校验（正整数、非空名称、层级顺序等）统一在服务层完成，
这样每一次被拒绝的写操作都会留下审计记录。
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.packages.physical_storage.api.v1.schemas.common import ResponseEnvelope


class StorageUnitCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    department_id: Optional[int] = None
    sub_department_id: Optional[int] = None
    parent_id: Optional[int] = None
    unit_type: Optional[str] = None
    unit_name: Optional[str] = None
    folder_capacity: Optional[int] = None


class HierarchyCreateRequest(BaseModel):
    """一次性创建多级单元；各级名称均可为空，空名称的层级会被跳过。"""

    model_config = ConfigDict(extra="forbid")

    department_id: Optional[int] = None
    sub_department_id: Optional[int] = None
    room_name: Optional[str] = None
    cabinet_name: Optional[str] = None
    layer_name: Optional[str] = None
    box_name: Optional[str] = None
    folder_name: Optional[str] = None
    folder_capacity: Optional[int] = None


class CapacityUpdateRequest(BaseModel):
    folder_capacity: Optional[int] = None


class WriteResult(BaseModel):
    """写操作的统一结果。"""

    success: bool
    message: str
    id: Optional[int] = None
    full_path: Optional[str] = None
    created_ids: Optional[list[int]] = None


class LocationTreeNode(BaseModel):
    id: int
    parent_id: Optional[int]
    unit_name: str
    unit_type: str
    folder_capacity: int
    full_path: str
    file_count: int
    breadcrumbs: list[str]
    child_type: Optional[str] = None
    children: list["LocationTreeNode"]


class LocationSearchHit(BaseModel):
    id: int
    unit_name: str
    unit_type: str
    full_path: str
    breadcrumbs: list[str]


class LocationFileItem(BaseModel):
    id: int
    file_name: str


class FileLocationPath(BaseModel):
    path: str
    department: str
    location: Optional[str]
    details: dict[str, Optional[str]]


WriteResponse = ResponseEnvelope[WriteResult]
LocationTreeResponse = ResponseEnvelope[list[LocationTreeNode]]
LocationSearchResponse = ResponseEnvelope[list[LocationSearchHit]]
LocationFilesResponse = ResponseEnvelope[list[LocationFileItem]]
FileLocationPathResponse = ResponseEnvelope[FileLocationPath]
