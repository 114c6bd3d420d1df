"""写操作执行器：统一事务提交/回滚、审计记录与结果封装。"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.packages.physical_storage.core.constants import MSG_DATABASE_ERROR, MSG_UNEXPECTED_ERROR
from app.packages.physical_storage.core.context import OperationContext
from app.packages.physical_storage.core.enums import OperationKindEnum
from app.packages.physical_storage.core.exceptions import AppException, DatabaseError
from app.packages.physical_storage.core.logger import logger
from app.packages.physical_storage.core.responses import create_result
from app.packages.physical_storage.services.audit_service import TransactionLogger, transaction_logger

Operation = Callable[[], tuple[dict[str, Any], str]]


def reject(
    db: Session,
    ctx: OperationContext,
    kind: OperationKindEnum,
    exc: AppException,
    *,
    audit: TransactionLogger = transaction_logger,
) -> dict[str, Any]:
    """回滚当前事务、写入失败审计，并把业务异常转换为统一结果。"""
    db.rollback()
    logger.warning("%s rejected: %s", kind.value, exc.message)
    audit.failure(ctx, kind, exc.message)
    return create_result(False, exc.message, code=exc.status_code)


def run_in_transaction(
    db: Session,
    ctx: OperationContext,
    kind: OperationKindEnum,
    operation: Operation,
    *,
    audit: TransactionLogger = transaction_logger,
) -> dict[str, Any]:
    """执行 ``operation`` 并提交；任何失败都先回滚再返回。

    ``operation`` 返回 (结果, 审计描述)，其内部只允许 flush，不允许提交。
    """
    try:
        result, audit_message = operation()
        db.commit()
    except AppException as exc:
        return reject(db, ctx, kind, exc, audit=audit)
    except SQLAlchemyError:
        logger.exception("Database error during %s", kind.value)
        return reject(db, ctx, kind, DatabaseError(MSG_DATABASE_ERROR), audit=audit)
    except Exception:
        logger.exception("Unexpected error during %s", kind.value)
        return reject(
            db, ctx, kind, AppException(MSG_UNEXPECTED_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR), audit=audit
        )

    logger.info("%s succeeded: %s", kind.value, audit_message)
    audit.success(ctx, kind, audit_message)
    return result
