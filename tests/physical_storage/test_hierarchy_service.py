"""批量层级创建：逐级挂接、默认容量与整体回滚。"""

from app.packages.physical_storage.core.constants import (
    MSG_DEPARTMENT_NOT_FOUND,
    MSG_FOLDER_CREATE_FAILED,
    MSG_INVALID_CAPACITY,
    MSG_NO_UNIT_NAMES,
)
from app.packages.physical_storage.models import StorageLocation, TransactionLog
from app.packages.physical_storage.services.hierarchy_service import hierarchy_service


def _rows(db):
    return db.query(StorageLocation).order_by(StorageLocation.id.asc()).all()


def test_full_chain_is_created_in_order(db_session_fixture, ctx, department, storage_root):
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {
            "department_id": department.id,
            "room_name": "Lab1",
            "cabinet_name": "A",
            "layer_name": "Top",
            "box_name": "Box 3",
            "folder_name": "Contracts",
            "folder_capacity": 25,
        },
    )

    assert result["success"] is True
    rows = _rows(db_session_fixture)
    assert [row.unit_type for row in rows] == ["room", "cabinet", "layer", "box", "folder"]
    assert [row.parent_id for row in rows] == [None] + [row.id for row in rows[:-1]]
    assert rows[-1].full_path == "Lab1/A/Top/Box 3/Contracts"
    assert rows[-1].folder_capacity == 25
    assert result["id"] == rows[-1].id
    assert result["created_ids"] == [row.id for row in rows]
    assert (storage_root / "engineering" / "Lab1/A/Top/Box 3/Contracts").is_dir()


def test_skipped_levels_attach_to_nearest_created(db_session_fixture, ctx, department):
    """只给出 room 与 folder 时，folder 直接挂在 room 下。"""
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {"department_id": department.id, "room_name": "R", "cabinet_name": "  ", "folder_name": "F"},
    )

    assert result["success"] is True
    room, folder = _rows(db_session_fixture)
    assert folder.parent_id == room.id
    assert folder.full_path == "R/F"
    assert folder.folder_capacity == 10


def test_chain_without_room_starts_at_first_given_level(db_session_fixture, ctx, department):
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture, ctx, {"department_id": department.id, "box_name": "B", "folder_name": "F"}
    )

    assert result["success"] is True
    box, folder = _rows(db_session_fixture)
    assert box.parent_id is None
    assert folder.full_path == "B/F"


def test_sub_department_is_applied_to_every_level(db_session_fixture, ctx, department, sub_department):
    hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {
            "department_id": department.id,
            "sub_department_id": sub_department.id,
            "room_name": "R",
            "cabinet_name": "C",
        },
    )

    assert {row.sub_department_id for row in _rows(db_session_fixture)} == {sub_department.id}


def test_all_blank_names_fail_without_rows(db_session_fixture, ctx, department):
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture, ctx, {"department_id": department.id, "room_name": "", "folder_name": "   "}
    )

    assert result["success"] is False
    assert result["message"] == MSG_NO_UNIT_NAMES
    assert _rows(db_session_fixture) == []


def test_invalid_folder_capacity_rolls_back_earlier_levels(db_session_fixture, ctx, department):
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {"department_id": department.id, "room_name": "R", "folder_name": "F", "folder_capacity": -2},
    )

    assert result["success"] is False
    assert result["message"] == MSG_INVALID_CAPACITY
    assert _rows(db_session_fixture) == []


def test_directory_failure_mid_chain_rolls_back_everything(db_session_fixture, ctx, department, storage_root):
    """cabinet 目录无法创建时，已插入的 room 也要回滚；已建好的 room 目录保留。"""
    blocker = storage_root / "engineering" / "R" / "C"
    blocker.parent.mkdir(parents=True)
    blocker.write_text("occupied")

    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {"department_id": department.id, "room_name": "R", "cabinet_name": "C", "layer_name": "L"},
    )

    assert result["success"] is False
    assert result["message"] == MSG_FOLDER_CREATE_FAILED
    assert _rows(db_session_fixture) == []
    assert (storage_root / "engineering" / "R").is_dir()


def test_unknown_department(db_session_fixture, ctx):
    result = hierarchy_service.add_full_hierarchy(db_session_fixture, ctx, {"department_id": 404, "room_name": "R"})

    assert result["success"] is False
    assert result["message"] == MSG_DEPARTMENT_NOT_FOUND


def test_single_audit_record_per_call(db_session_fixture, ctx, department):
    hierarchy_service.add_full_hierarchy(
        db_session_fixture, ctx, {"department_id": department.id, "room_name": "R", "cabinet_name": "C"}
    )

    rows = db_session_fixture.query(TransactionLog).all()
    assert len(rows) == 1
    assert rows[0].transaction_type == "add_hierarchy"
    assert rows[0].transaction_status == "success"
    room_id, cabinet_id = [row.id for row in db_session_fixture.query(StorageLocation).order_by(StorageLocation.id.asc())]
    assert rows[0].description == (
        f"Storage hierarchy added successfully: room R (#{room_id}), cabinet C (#{cabinet_id})."
    )
