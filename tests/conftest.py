"""测试夹具：为 pytest 提供数据库、存储根目录、操作上下文与客户端的共享配置。"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

_TEST_ROOT = tempfile.mkdtemp(prefix="physical_storage_tests_")
TEST_DB_PATH = os.path.join(_TEST_ROOT, "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# 必须在导入应用模块之前写入，Settings 会被缓存
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "log")
os.environ["STORAGE_BASE_DIR"] = os.path.join(_TEST_ROOT, "storage")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.packages.physical_storage.core.context import OperationContext  # noqa: E402
from app.packages.physical_storage.core.dependencies import get_db, get_operation_context  # noqa: E402
from app.packages.physical_storage.db import session as db_session  # noqa: E402
from app.packages.physical_storage.models import Base, Department, FileRecord  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)
    yield

    engine.dispose()
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_tables() -> None:
    """每个用例开始前清空全部表，保证用例之间互不影响。"""
    with db_session.engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def storage_root(tmp_path: Path) -> Path:
    return tmp_path / "storage"


@pytest.fixture()
def ctx(storage_root: Path) -> OperationContext:
    return OperationContext(actor_id=7, base_dir=storage_root)


@pytest.fixture()
def department(db_session_fixture: Session) -> Department:
    """主部门：目录镜像位于 ``<storage_root>/engineering``。"""
    record = Department(name="College of Engineering", folder_path="/engineering")
    db_session_fixture.add(record)
    db_session_fixture.commit()
    return record


@pytest.fixture()
def sub_department(db_session_fixture: Session, department: Department) -> Department:
    record = Department(
        name="Civil Engineering",
        parent_department_id=department.id,
        folder_path="/engineering/civil",
    )
    db_session_fixture.add(record)
    db_session_fixture.commit()
    return record


@pytest.fixture()
def make_file(db_session_fixture: Session):
    """创建一条文件记录，可选挂到某个存储单元。"""

    def _make(location_id=None, *, name: str = "memo.pdf", department_id=None, sub_department_id=None) -> FileRecord:
        record = FileRecord(
            file_name=name,
            storage_location_id=location_id,
            department_id=department_id,
            sub_department_id=sub_department_id,
        )
        db_session_fixture.add(record)
        db_session_fixture.commit()
        return record

    return _make


@pytest.fixture()
def client(ctx: OperationContext) -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient，并注入测试专用的数据库与操作上下文依赖。"""
    from app.main import app

    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def override_get_operation_context() -> OperationContext:
        return ctx

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_operation_context] = override_get_operation_context

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
