"""目录镜像：在存储根目录下为每个存储单元维护一个同名目录。"""

from __future__ import annotations

from pathlib import Path

from app.packages.physical_storage.core.constants import PATH_DELIMITER


class DirectoryMirror:
    def __init__(self, base_dir: Path | str):
        self.root = Path(base_dir).resolve()

    # 统一的安全路径拼接，防止路径遍历
    def resolve(self, folder_path: str | None, full_path: str) -> Path:
        """计算 ``根目录 + 部门目录 + "/" + full_path``，结果必须位于根目录之内。"""
        parts = [part.strip(PATH_DELIMITER) for part in (folder_path or "", full_path)]
        relative = PATH_DELIMITER.join(part for part in parts if part)
        candidate = (self.root / relative).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError as exc:
            raise PermissionError(f"Path escapes storage root: {relative}") from exc
        return candidate

    def ensure_directory(self, target: Path) -> Path:
        """递归创建目录；目录已存在视为成功，同名文件存在时抛出 ``OSError``。"""
        target.mkdir(parents=True, exist_ok=True)
        return target
