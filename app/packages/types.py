"""业务包元数据定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import Any, Callable

from fastapi import APIRouter


@dataclass(frozen=True)
class AppPackage:
    """业务包对主应用暴露的接口；``startup_hooks`` 在应用启动时按顺序执行。"""

    name: str
    api_router: APIRouter
    get_settings: Callable[[], Any]
    setup_logging: Callable[[], None]
    logger: Logger
    create_response: Callable[..., dict]
    http_exception_handler: Callable[..., Any]
    generic_exception_handler: Callable[..., Any]
    startup_hooks: tuple[Callable[[], Any], ...] = field(default_factory=tuple)

    def run_startup(self) -> None:
        for hook in self.startup_hooks:
            hook()
