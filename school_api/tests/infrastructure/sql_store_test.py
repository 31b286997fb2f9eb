import pytest

from school_api.db.base import dispose_engines
from school_api.infrastructure.exceptions import RecordNotFoundError, StorageError
from school_api.infrastructure.record_storage import SqlRecordStore, StoreConfig
from school_api.models import records as tables


def student(record_id, name="Victor Leotte", **overrides):
    record = {
        "id": record_id,
        "name": name,
        "age": 6,
        "phone_number": "48999055949",
        "status": True,
        "parents": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def store(tmp_path):
    store = SqlRecordStore(StoreConfig(
        resource="students",
        database_uri=f"sqlite:///{tmp_path / 'nested' / 'school.db'}",
        model=tables.Student,
    ))
    store.connect()
    yield store
    store.disconnect()
    dispose_engines()


def test_connect_creates_database_and_tables(store, tmp_path):
    assert (tmp_path / "nested" / "school.db").exists()
    assert store.ping()
    assert store.list_records() == []


def test_insert_and_get(store):
    assert store.insert_record(student("a")) == student("a")
    assert store.get_record("a") == student("a")


def test_update_replaces_every_column(store):
    store.insert_record(student("a", parents="Maria"))
    updated = store.update_record("a", {"name": "Luis Gabriel", "age": 7, "phone_number": "1", "status": False})
    assert updated == student("a", name="Luis Gabriel", age=7, phone_number="1", status=False, parents=None)
    assert store.get_record("a") == updated


def test_delete_returns_removed_record(store):
    store.insert_record(student("a"))
    store.insert_record(student("b"))
    assert store.delete_record("a") == student("a")
    assert [r["id"] for r in store.list_records()] == ["b"]
    with pytest.raises(RecordNotFoundError):
        store.delete_record("a")


def test_unknown_id_raises(store):
    with pytest.raises(RecordNotFoundError):
        store.get_record("missing")
    with pytest.raises(RecordNotFoundError):
        store.update_record("missing", student("missing"))


def test_duplicate_id_is_a_storage_error_and_rolls_back(store):
    store.insert_record(student("a"))
    with pytest.raises(StorageError):
        store.insert_record(student("a", name="Other"))
    assert store.list_records() == [student("a")]


def test_search_escapes_like_wildcards(store):
    store.insert_record(student("a", name="Victor Leotte"))
    store.insert_record(student("b", name="100% Attendance"))
    assert [r["id"] for r in store.search_records("name", "leot")] == ["a"]
    assert [r["id"] for r in store.search_records("name", "%")] == ["b"]
    assert store.search_records("name", "_") == []


def test_requires_model_and_uri():
    with pytest.raises(ValueError):
        SqlRecordStore(StoreConfig(resource="students", database_uri="sqlite://"))
    with pytest.raises(ValueError):
        SqlRecordStore(StoreConfig(resource="students", model=tables.Student))


def test_not_connected_is_a_storage_error():
    store = SqlRecordStore(StoreConfig(resource="students", database_uri="sqlite://", model=tables.Student))
    with pytest.raises(StorageError):
        store.list_records()


def test_api_round_trip_on_sql_backend(sql_client, payload):
    created = sql_client.post("/events", json=payload("events")).json()
    assert created["date"] == "2024-05-20T14:30:00Z"
    assert sql_client.get(f"/events/{created['id']}").json() == created

    missing = sql_client.put("/events/missing", json=payload("events"))
    assert missing.status_code == 404

    assert sql_client.delete(f"/events/{created['id']}").json() == created
    assert sql_client.get("/events").json() == []


def test_api_search_on_sql_backend(sql_client, payload):
    sql_client.post("/students", json=payload("students"))
    resp = sql_client.get("/students/name/victor")
    assert resp.status_code == 200
    assert resp.json()[0]["name"] == "Victor Leotte"
    assert resp.json()[0]["parents"] is None


def test_user_password_hash_kept_out_of_responses_on_sql_backend(sql_client, payload):
    created = sql_client.post("/users", json=payload("users")).json()
    assert "password" not in created
    assert sql_client.get(f"/users/{created['id']}").json() == created


def test_driver_overflow_is_a_storage_error_and_rolls_back(store):
    store.insert_record(student("a"))
    with pytest.raises(StorageError) as excinfo:
        store.insert_record(student("big", age=10 ** 20))
    assert "too large" in excinfo.value.message
    assert store.list_records() == [student("a")]
