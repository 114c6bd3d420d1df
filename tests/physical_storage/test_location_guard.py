"""删除守卫的计数与判定。"""

import pytest

from app.packages.physical_storage.core.constants import MSG_HAS_CHILDREN, MSG_HAS_FILES
from app.packages.physical_storage.core.exceptions import ConflictError
from app.packages.physical_storage.services.hierarchy_service import hierarchy_service
from app.packages.physical_storage.services.location_guard import location_guard


def test_guard_counts_only_direct_dependants(db_session_fixture, ctx, department, make_file):
    result = hierarchy_service.add_full_hierarchy(
        db_session_fixture,
        ctx,
        {"department_id": department.id, "room_name": "R", "cabinet_name": "C", "layer_name": "L"},
    )
    room_id, cabinet_id, layer_id = result["created_ids"]
    make_file(layer_id)

    assert location_guard.count_children(db_session_fixture, room_id) == 1
    assert location_guard.count_files(db_session_fixture, room_id) == 0
    assert location_guard.count_files(db_session_fixture, layer_id) == 1

    with pytest.raises(ConflictError) as excinfo:
        location_guard.ensure_deletable(db_session_fixture, cabinet_id)
    assert excinfo.value.message == MSG_HAS_CHILDREN
    assert excinfo.value.status_code == 409

    with pytest.raises(ConflictError) as excinfo:
        location_guard.ensure_deletable(db_session_fixture, layer_id)
    assert excinfo.value.message == MSG_HAS_FILES

    assert location_guard.is_deletable(db_session_fixture, room_id) is False
    assert location_guard.is_deletable(db_session_fixture, 999) is True
