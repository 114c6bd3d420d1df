"""操作上下文：显式传递操作人和目录镜像根路径，避免业务代码读取全局状态。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.packages.physical_storage.core.config import get_settings


@dataclass(frozen=True)
class OperationContext:
    actor_id: Optional[int]
    base_dir: Path

    @classmethod
    def from_settings(cls, actor_id: Optional[int] = None) -> "OperationContext":
        return cls(actor_id=actor_id, base_dir=get_settings().storage_base_path)
