"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.physical_storage.models.base import Base
from app.packages.physical_storage.models.department import Department
from app.packages.physical_storage.models.file_record import FileRecord
from app.packages.physical_storage.models.storage_location import StorageLocation
from app.packages.physical_storage.models.transaction_log import TransactionLog

__all__ = [
    "Base",
    "Department",
    "FileRecord",
    "StorageLocation",
    "TransactionLog",
]
