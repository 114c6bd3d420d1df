"""存储单元接口的集成测试用例。"""

from pathlib import Path

from fastapi.testclient import TestClient

from app.packages.physical_storage.core.config import get_settings
from app.packages.physical_storage.core.dependencies import get_operation_context
from app.packages.physical_storage.services.directory_mirror import DirectoryMirror

BASE_URL = "/api/v1/storage-locations"


def _create(client: TestClient, **payload):
    return client.post(BASE_URL, json=payload)


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"] == {"status": "healthy"}
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


def test_create_and_read_tree(client: TestClient, department, storage_root: Path):
    room = _create(client, department_id=department.id, unit_type="room", unit_name="Lab1")
    assert room.status_code == 200
    room_data = room.json()["data"]
    assert room_data["success"] is True
    assert room_data["full_path"] == "Lab1"

    cabinet = _create(client, department_id=department.id, unit_type="cabinet", unit_name="A", parent_id=room_data["id"])
    assert cabinet.json()["data"]["full_path"] == "Lab1/A"
    assert (storage_root / "engineering" / "Lab1" / "A").is_dir()

    response = client.get(f"{BASE_URL}/tree", params={"department_id": department.id})

    assert response.status_code == 200
    payload = response.json()
    assert payload["code"] == 200
    (root,) = payload["data"]
    assert root["unit_name"] == "Lab1"
    assert root["children"][0]["breadcrumbs"] == ["Lab1", "A"]
    assert root["children"][0]["children"] == []


def test_type_mismatch_is_reported_in_envelope(client: TestClient, department):
    room = _create(client, department_id=department.id, unit_type="room", unit_name="Lab1").json()["data"]

    response = _create(
        client, department_id=department.id, unit_type="folder", unit_name="F", parent_id=room["id"], folder_capacity=3
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["msg"] == "A room can only contain cabinet units."
    assert payload["data"]["success"] is False


def test_unknown_field_is_rejected(client: TestClient, department):
    response = _create(client, department_id=department.id, unit_type="room", unit_name="Lab1", colour="red")

    assert response.status_code == 422
    assert response.json()["msg"] == "Request validation failed."


def test_hierarchy_capacity_and_delete_flow(client: TestClient, department):
    created = client.post(
        f"{BASE_URL}/hierarchy",
        json={"department_id": department.id, "room_name": "R", "folder_name": "F"},
    )
    assert created.status_code == 200
    room_id, folder_id = created.json()["data"]["created_ids"]

    updated = client.patch(f"{BASE_URL}/{folder_id}/capacity", json={"folder_capacity": 30})
    assert updated.status_code == 200
    tree = client.get(f"{BASE_URL}/tree", params={"department_id": department.id}).json()["data"]
    assert tree[0]["children"][0]["folder_capacity"] == 30

    blocked = client.delete(f"{BASE_URL}/{room_id}")
    assert blocked.status_code == 409
    assert blocked.json()["msg"] == "Cannot delete unit with child locations."

    assert client.delete(f"{BASE_URL}/{folder_id}").status_code == 200
    assert client.delete(f"{BASE_URL}/{room_id}").status_code == 200
    assert client.get(f"{BASE_URL}/tree", params={"department_id": department.id}).json()["data"] == []


def test_files_listing_path_and_detach(client: TestClient, department, make_file):
    created = client.post(
        f"{BASE_URL}/hierarchy",
        json={"department_id": department.id, "room_name": "R", "folder_name": "F", "folder_capacity": 2},
    ).json()["data"]
    record = make_file(created["id"], name="deed.pdf", department_id=department.id)

    files = client.get(f"{BASE_URL}/{created['id']}/files")
    assert files.json()["data"] == [{"id": record.id, "file_name": "deed.pdf"}]

    path = client.get(f"{BASE_URL}/files/{record.id}/path")
    assert path.json()["data"]["path"] == "College of Engineering → R → F"

    detached = client.delete(f"{BASE_URL}/files/{record.id}/location")
    assert detached.status_code == 200
    assert client.get(f"{BASE_URL}/{created['id']}/files").json()["data"] == []


def test_search_endpoint(client: TestClient, department):
    client.post(f"{BASE_URL}/hierarchy", json={"department_id": department.id, "room_name": "Records Room", "cabinet_name": "East"})

    response = client.get(f"{BASE_URL}/search", params={"department_id": department.id, "term": "east"})

    assert response.status_code == 200
    assert [hit["unit_name"] for hit in response.json()["data"]] == ["East"]


def test_not_found_responses(client: TestClient):
    assert client.get(f"{BASE_URL}/999/files").status_code == 404
    assert client.get(f"{BASE_URL}/files/999/path").status_code == 404
    assert client.delete(f"{BASE_URL}/999").status_code == 404


def test_operation_context_reads_user_header():
    ctx = get_operation_context(x_user_id=3)

    assert ctx.actor_id == 3
    assert ctx.base_dir == get_settings().storage_base_path


def test_startup_prepares_storage_root(client: TestClient):
    assert get_settings().storage_base_path.is_dir()


def test_control_characters_in_name_are_rejected(client: TestClient, department):
    response = _create(client, department_id=department.id, unit_type="room", unit_name="Lab\u00001")

    assert response.status_code == 400
    assert response.json()["msg"] == "All required fields must be filled correctly."
    assert client.get(f"{BASE_URL}/tree", params={"department_id": department.id}).json()["data"] == []


def test_unexpected_error_is_wrapped_in_envelope(client: TestClient, department, monkeypatch):
    def boom(self, target):
        raise RuntimeError("mirror exploded")

    monkeypatch.setattr(DirectoryMirror, "ensure_directory", boom)

    response = _create(client, department_id=department.id, unit_type="room", unit_name="Lab1")

    assert response.status_code == 500
    payload = response.json()
    assert payload["msg"] == "Internal server error."
    assert payload["data"]["success"] is False
    assert client.get(f"{BASE_URL}/tree", params={"department_id": department.id}).json()["data"] == []
