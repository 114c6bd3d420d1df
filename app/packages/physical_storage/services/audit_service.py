"""审计日志服务：尽力而为地记录每一次写操作的结果。

审计记录使用独立的短会话写入，因此主事务回滚不会带走失败记录；
审计本身写入失败只输出告警日志，绝不覆盖主操作的返回结果。
"""

from __future__ import annotations

from typing import Optional

from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.core.enums import OperationKindEnum, TransactionStatusEnum
from app.packages.physical_storage.core.logger import logger
from app.packages.physical_storage.crud.transaction_logs import transaction_log_crud
from app.packages.physical_storage.db import session as db_session


class TransactionLogger:
    def record(
        self,
        actor_id: Optional[int],
        status: TransactionStatusEnum,
        kind: OperationKindEnum,
        message: str,
    ) -> bool:
        session = db_session.SessionLocal()
        try:
            transaction_log_crud.create(
                session,
                {
                    "user_id": actor_id,
                    "transaction_status": TransactionStatusEnum(status).value,
                    "transaction_type": OperationKindEnum(kind).value,
                    "description": message,
                },
                auto_commit=True,
            )
            return True
        except Exception:
            session.rollback()
            logger.warning(
                "Failed to write transaction log (kind=%s, status=%s)", kind, status, exc_info=True
            )
            return False
        finally:
            session.close()

    def success(self, ctx: OperationContext, kind: OperationKindEnum, message: str) -> bool:
        return self.record(ctx.actor_id, TransactionStatusEnum.SUCCESS, kind, message)

    def failure(self, ctx: OperationContext, kind: OperationKindEnum, message: str) -> bool:
        return self.record(ctx.actor_id, TransactionStatusEnum.FAILURE, kind, message)


transaction_logger = TransactionLogger()
