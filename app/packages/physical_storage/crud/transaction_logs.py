"""审计日志 CRUD。"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.physical_storage.crud.base import CRUDBase
from app.packages.physical_storage.models.transaction_log import TransactionLog


class CRUDTransactionLog(CRUDBase[TransactionLog]):
    def list_recent(
        self,
        db: Session,
        *,
        transaction_type: Optional[str] = None,
        limit: int = 50,
    ) -> list[TransactionLog]:
        query = self.query(db)
        if transaction_type:
            query = query.filter(TransactionLog.transaction_type == transaction_type)
        return query.order_by(TransactionLog.id.desc()).limit(limit).all()


transaction_log_crud = CRUDTransactionLog(TransactionLog)
