"""存储单元树：按部门分区读取平铺行，在内存中组装父子森林。

森林以 ID 为键保存节点，子节点列表只保存子节点 ID，不保存对象引用。
父节点不在本次读取范围内的节点既不是根，也不会挂到任何节点下。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.core.config import get_settings
from app.packages.physical_storage.core.constants import MSG_INVALID_LOCATION_ID, MSG_LOCATION_NOT_FOUND
from app.packages.physical_storage.core.enums import UnitType
from app.packages.physical_storage.core.exceptions import NotFoundError, ValidationError
from app.packages.physical_storage.core.hierarchy import suggest_child_type
from app.packages.physical_storage.crud.file_records import file_record_crud
from app.packages.physical_storage.crud.storage_locations import storage_location_crud
from app.packages.physical_storage.models.storage_location import StorageLocation
from app.packages.physical_storage.services.storage_unit_service import parse_positive_int


@dataclass
class LocationNode:
    id: int
    parent_id: Optional[int]
    department_id: int
    sub_department_id: Optional[int]
    unit_name: str
    unit_type: UnitType
    folder_capacity: int
    full_path: str
    children: list[int] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: StorageLocation) -> "LocationNode":
        return cls(
            id=row.id,
            parent_id=row.parent_id,
            department_id=row.department_id,
            sub_department_id=row.sub_department_id,
            unit_name=row.unit_name,
            unit_type=UnitType(row.unit_type),
            folder_capacity=row.folder_capacity,
            full_path=row.full_path,
        )


@dataclass
class LocationForest:
    nodes: dict[int, LocationNode]
    roots: list[int]
    breadcrumbs: dict[int, list[str]]
    file_counts: dict[int, int]

    def __contains__(self, location_id: int) -> bool:
        return location_id in self.nodes

    def children_of(self, location_id: int) -> list[LocationNode]:
        return [self.nodes[child_id] for child_id in self.nodes[location_id].children]

    def breadcrumb(self, location_id: int, limit: Optional[int] = None) -> list[str]:
        """根到当前节点的名称序列；``limit`` 只保留最后几级。"""
        trail = self.breadcrumbs.get(location_id, [])
        if limit is not None and limit > 0:
            return trail[-limit:]
        return list(trail)

    def walk(self) -> Iterator[tuple[LocationNode, int]]:
        """从各根节点深度优先遍历，产出 (节点, 深度)。"""
        stack = [(root_id, 0) for root_id in reversed(self.roots)]
        while stack:
            node_id, depth = stack.pop()
            node = self.nodes[node_id]
            yield node, depth
            stack.extend((child_id, depth + 1) for child_id in reversed(node.children))

    def to_nested(self, breadcrumb_depth: Optional[int] = None) -> list[dict[str, Any]]:
        """渲染为嵌套字典，供接口直接输出。"""

        def build(node: LocationNode) -> dict[str, Any]:
            child_type = suggest_child_type(node.unit_type)
            return {
                "id": node.id,
                "parent_id": node.parent_id,
                "unit_name": node.unit_name,
                "unit_type": node.unit_type.value,
                "folder_capacity": node.folder_capacity,
                "full_path": node.full_path,
                "file_count": self.file_counts.get(node.id, 0),
                "breadcrumbs": self.breadcrumb(node.id, breadcrumb_depth),
                "child_type": child_type.value if child_type else None,
                "children": [build(child) for child in self.children_of(node.id)],
            }

        return [build(self.nodes[root_id]) for root_id in self.roots]


def _compute_breadcrumbs(nodes: dict[int, LocationNode]) -> dict[int, list[str]]:
    """一次性计算所有节点的祖先名称链，已算过的祖先直接复用。"""
    memo: dict[int, list[str]] = {}
    for start_id in nodes:
        pending: list[int] = []
        current: Optional[int] = start_id
        while current is not None and current in nodes and current not in memo and current not in pending:
            pending.append(current)
            current = nodes[current].parent_id
        prefix = memo.get(current, []) if current is not None else []
        for node_id in reversed(pending):
            prefix = prefix + [nodes[node_id].unit_name]
            memo[node_id] = prefix
    return memo


class TreeService:
    def build_tree(
        self,
        db: Session,
        department_id: int,
        sub_department_id: Optional[int] = None,
    ) -> LocationForest:
        """读取部门（或子部门）分区内的全部存储单元并组装森林。"""
        rows = storage_location_crud.list_partition(
            db, department_id=department_id, sub_department_id=sub_department_id
        )
        nodes: dict[int, LocationNode] = {row.id: LocationNode.from_row(row) for row in rows}

        roots: list[int] = []
        for node in nodes.values():
            if node.parent_id is None:
                roots.append(node.id)
            elif node.parent_id in nodes:
                nodes[node.parent_id].children.append(node.id)

        return LocationForest(
            nodes=nodes,
            roots=roots,
            breadcrumbs=_compute_breadcrumbs(nodes),
            file_counts=file_record_crud.count_by_locations(db, nodes.keys()),
        )

    def search_locations(
        self,
        db: Session,
        department_id: int,
        sub_department_id: Optional[int] = None,
        term: str = "",
    ) -> list[dict[str, Any]]:
        """按名称（不区分大小写）检索分区内挂在树上的存储单元，按树的先序返回并附带面包屑。"""
        needle = (term or "").strip().lower()
        if not needle:
            return []
        forest = self.build_tree(db, department_id, sub_department_id)
        depth = get_settings().breadcrumb_depth
        return [
            {
                "id": node.id,
                "unit_name": node.unit_name,
                "unit_type": node.unit_type.value,
                "full_path": node.full_path,
                "breadcrumbs": forest.breadcrumb(node.id, depth),
            }
            for node, _ in forest.walk()
            if needle in node.unit_name.lower()
        ]

    def list_files_at(self, db: Session, location_id: Any) -> list[dict[str, Any]]:
        try:
            target_id = parse_positive_int(location_id)
        except ValueError as exc:
            raise ValidationError(MSG_INVALID_LOCATION_ID) from exc
        if target_id is None:
            raise ValidationError(MSG_INVALID_LOCATION_ID)
        if storage_location_crud.get(db, target_id) is None:
            raise NotFoundError(MSG_LOCATION_NOT_FOUND)
        return [
            {"id": record.id, "file_name": record.file_name}
            for record in file_record_crud.list_by_location(db, target_id)
        ]


tree_service = TreeService()
