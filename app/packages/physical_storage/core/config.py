"""配置模块：加载 .env 文件并以 pydantic-settings 暴露实体存储服务的全部设置。"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _detect_project_root() -> Path:
    """取第一个包含 ``app`` 包目录的上级目录作为项目根。"""
    here = Path(__file__).resolve()
    return next((parent for parent in here.parents if (parent / "app").is_dir()), here.parent)


PROJECT_ROOT = _detect_project_root()


def _env_file_chain() -> list[tuple[Path, bool]]:
    """返回 (文件, 是否覆盖已有变量) 列表。

    ``ENV_FILE`` 指定时只加载该文件；否则先加载 ``.env``，再按 ``ENVIRONMENT``
    （``DEBUG`` 为真且未指定时视为 development）叠加 ``.env.<环境>``。
    """
    explicit = os.getenv("ENV_FILE")
    if explicit:
        return [(PROJECT_ROOT / explicit, True)]

    chain = [(PROJECT_ROOT / ".env", False)]
    environment = os.getenv("ENVIRONMENT")
    if environment is None and os.getenv("DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}:
        environment = "development"
    if environment:
        name = environment if environment.startswith(".env") else f".env.{environment}"
        chain.append((PROJECT_ROOT / name, True))
    return chain


for _env_path, _override in _env_file_chain():
    if _env_path.exists():
        load_dotenv(_env_path, override=_override, encoding="utf-8")


class Settings(BaseSettings):
    """实体存储层级服务的配置项，均可通过同名大写环境变量覆盖。"""

    model_config = SettingsConfigDict(extra="ignore")

    project_name: str = Field(default="Physical Storage API", alias="PROJECT_NAME")
    api_v1_str: str = Field(default="/api/v1", alias="API_V1_STR")
    debug: bool = Field(default=False, alias="DEBUG")
    app_port: int = Field(default=8000, alias="APP_PORT")

    # 设置后忽略下面的 PostgreSQL 分项（测试使用 SQLite）
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_host: str = Field(default="localhost", alias="DATABASE_HOST")
    database_port: int = Field(default=5432, alias="DATABASE_PORT")
    database_user: str = Field(default="postgres", alias="DATABASE_USER")
    database_password: str = Field(default="postgres", alias="DATABASE_PASSWORD")
    database_name: str = Field(default="physical_storage", alias="DATABASE_NAME")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    timezone: str = Field(default="Asia/Manila", alias="TIMEZONE")

    # 部门 folder_path 与单元 full_path 都拼接在该目录下
    storage_base_dir: str = Field(default="storage", alias="STORAGE_BASE_DIR")
    default_folder_capacity: int = Field(default=10, gt=0, alias="DEFAULT_FOLDER_CAPACITY")
    breadcrumb_depth: int = Field(default=3, gt=0, alias="BREADCRUMB_DEPTH")

    @property
    def sql_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @staticmethod
    def _under_project_root(raw: str) -> Path:
        path = Path(raw)
        return path if path.is_absolute() else PROJECT_ROOT / path

    @property
    def log_file_path(self) -> Path:
        return self._under_project_root(self.log_dir) / self.log_file_name

    @property
    def storage_base_path(self) -> Path:
        """目录镜像根路径；相对路径按项目根解析。"""
        return self._under_project_root(self.storage_base_dir)

    @property
    def timezone_info(self) -> ZoneInfo:
        """日志时间戳使用的时区，无法解析时退回 UTC。"""
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError:
            return ZoneInfo("UTC")


@lru_cache
def get_settings() -> Settings:
    """返回缓存的配置对象。"""
    return Settings()
