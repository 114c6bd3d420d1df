"""业务包注册中心：主应用通过名称选择要挂载的业务包。"""

from __future__ import annotations

import os
from typing import Optional

from . import physical_storage
from .types import AppPackage

ACTIVE_PACKAGE_ENV = "APP_ACTIVE_PACKAGE"
DEFAULT_PACKAGE = physical_storage.package

PACKAGE_REGISTRY: dict[str, AppPackage] = {item.name: item for item in (physical_storage.package,)}


def get_active_package(name: Optional[str] = None) -> AppPackage:
    """按显式名称、``APP_ACTIVE_PACKAGE`` 环境变量、默认包的顺序选择业务包。"""
    selected = name or os.getenv(ACTIVE_PACKAGE_ENV) or DEFAULT_PACKAGE.name
    package = PACKAGE_REGISTRY.get(selected)
    if package is None:
        raise RuntimeError(
            f"Unknown application package {selected!r}; registered: {', '.join(sorted(PACKAGE_REGISTRY))}"
        )
    return package


__all__ = ["PACKAGE_REGISTRY", "get_active_package"]
