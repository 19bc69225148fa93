import json

import pytest

from emerge_analytics.data.data_repository import DataRepository
from emerge_analytics.data.db.inmemory_db import InMemoryDatabase
from emerge_analytics.data.exceptions import DataAccessError
from emerge_analytics.data.models import Curriculum

from factories import error_doc, session_doc, tracking_doc


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_load_data_from_directory_counts_files(settings, tmp_path):
    data_dir = tmp_path / "export"
    data_dir.mkdir()
    _write_json(data_dir / "error_bank.json", [error_doc("a", 2, 1), error_doc("b", 1, 0)])
    _write_json(data_dir / "groups.json", [{"id": 1, "name": "Blue"}])

    repo = DataRepository(config=settings)
    counts = repo.load_data_from_directory(str(data_dir))

    assert counts == {
        "error_bank.json": 2,
        "sessions.json": 0,
        "groups.json": 1,
        "students.json": 0,
        "student_session_tracking.json": 0,
    }
    snapshot = repo.load_snapshot()
    assert [r.error_pattern for r in snapshot.error_records] == ["a", "b"]
    assert snapshot.completed_sessions == []


def test_malformed_file_is_a_read_failure(settings, tmp_path):
    data_dir = tmp_path / "export"
    data_dir.mkdir()
    (data_dir / "groups.json").write_text("[{", encoding="utf-8")

    repo = DataRepository(config=settings)
    with pytest.raises(DataAccessError) as excinfo:
        repo.load_data_from_directory(str(data_dir))
    assert excinfo.value.collection == "groups"
    assert "groups" in str(excinfo.value)


def test_connect_reads_configured_paths(settings, tmp_path):
    data_dir = tmp_path / "configured"
    data_dir.mkdir()
    _write_json(data_dir / "students.json", [{"id": 4, "name": "Dee", "group_id": 1}])
    settings.set_data_dir(str(data_dir))

    repo = DataRepository(config=settings)

    assert [s.name for s in repo.students.list_students()] == ["Dee"]
    assert repo.error_bank.list_error_records() == []


def test_invalid_documents_are_skipped(build_repository, caplog):
    repo = build_repository(
        error_records=[
            error_doc("fine", 3, 1),
            error_doc("impossible", 2, 5),
            {"curriculum": "klingon", "error_pattern": "bad curriculum"},
        ]
    )

    records = repo.error_bank.list_error_records()

    assert [r.error_pattern for r in records] == ["fine"]
    assert "Skipping invalid error_bank document" in caplog.text


def test_only_completed_sessions_are_listed(build_repository):
    repo = build_repository(
        sessions=[
            session_doc(1, "2024-02-01", status="planned"),
            session_doc(1, "2024-02-02"),
            session_doc(2, "2024-02-03", status="cancelled"),
            session_doc(2, "2024-02-04"),
        ]
    )

    completed = repo.sessions.list_completed_sessions()

    assert [s.date.isoformat() for s in completed] == ["2024-02-02", "2024-02-04"]
    assert all(s.is_completed() for s in completed)


def test_sessions_by_group_are_date_ordered(build_repository):
    repo = build_repository(
        sessions=[
            session_doc(1, "2024-03-10"),
            session_doc(1, "2024-03-01", status="planned"),
            session_doc(1, "2024-03-05"),
            session_doc(2, "2024-03-02"),
        ]
    )

    completed = repo.sessions.find_by_group(1)
    everything = repo.sessions.find_by_group(1, completed_only=False)

    assert [s.date.isoformat() for s in completed] == ["2024-03-05", "2024-03-10"]
    assert [s.date.isoformat() for s in everything] == ["2024-03-01", "2024-03-05", "2024-03-10"]


def test_null_error_lists_read_as_empty(build_repository):
    repo = build_repository(
        sessions=[{"group_id": 1, "date": "2024-01-01", "status": "completed",
                   "errors_observed": None, "unexpected_errors": None}]
    )

    [session] = repo.sessions.list_completed_sessions()

    assert session.get_all_errors() == []
    assert not session.has_pattern("anything")


def test_error_bank_queries(build_repository):
    repo = build_repository(
        error_records=[
            error_doc("a", 4, 2, protocol="first"),
            error_doc("sign error", 3, 3, curriculum="delta_math"),
            error_doc("a", 1, 0, protocol="second"),
        ]
    )
    error_bank = repo.error_bank

    assert [r.error_pattern for r in error_bank.find_by_curriculum(Curriculum.WILSON)] == ["a", "a"]
    assert error_bank.find_by_pattern("a").correction_protocol == "first"
    assert error_bank.find_by_pattern("missing") is None
    assert error_bank.get_curricula() == ["wilson", "delta_math"]
    assert error_bank.find_by_pattern("sign error").get_effectiveness_ratio() == 1.0


def test_group_student_and_tracking_queries(build_repository):
    repo = build_repository(
        groups=[{"id": 1, "name": "Blue", "curriculum": "wilson"}],
        students=[
            {"id": 1, "name": "Ana", "group_id": 1},
            {"id": 2, "name": "Ben", "group_id": 2},
        ],
        trackings=[
            tracking_doc(1, ["x"], {"x": True}, session_id=1),
            tracking_doc(2, ["y"], session_id=1),
            tracking_doc(1, ["z"], {"z": False}, session_id=2),
        ],
    )

    assert repo.groups.find_by_id(1).curriculum == Curriculum.WILSON
    assert repo.groups.find_by_id(9) is None
    assert [s.name for s in repo.students.find_by_group(1)] == ["Ana"]

    ana = repo.trackings.find_by_student(1)
    assert [t.session_id for t in ana] == [1, 2]
    assert [t.get_correction_outcomes() for t in ana] == [[True], [False]]


def test_load_snapshot_rejects_unknown_collections(build_repository):
    repo = build_repository()

    with pytest.raises(ValueError):
        repo.load_snapshot(["error_records", "lessons"])


def test_partial_snapshot_leaves_other_collections_empty(build_repository):
    repo = build_repository(
        groups=[{"id": 1, "name": "Blue"}],
        students=[{"id": 1, "name": "Ana", "group_id": 1}],
    )

    snapshot = repo.load_snapshot(["groups"])

    assert len(snapshot.groups) == 1
    assert snapshot.students == []


def test_data_summary(build_repository):
    repo = build_repository(
        error_records=[error_doc("a", 1, 1), error_doc("b", 1, 0, curriculum="amira")],
        sessions=[session_doc(1, "2024-01-01"), session_doc(1, "2024-01-02", status="planned")],
    )

    summary = repo.get_data_summary()

    assert summary["error_bank"] == 2
    assert summary["sessions"] == 2
    assert summary["completed_sessions"] == 1
    assert summary["groups"] == 0
    assert summary["curricula"] == ["wilson", "amira"]


def test_in_memory_query_operators():
    db = InMemoryDatabase()
    db.insert_many(
        "things",
        [
            {"id": 1, "n": 5, "tags": ["a", "b"], "meta": {"kind": "x"}},
            {"id": 2, "n": 10, "tags": ["b"], "meta": {"kind": "y"}},
            {"id": 3, "tags": [], "meta": {"kind": "x"}},
        ],
    )
    things = db["things"]

    assert [d["id"] for d in things.find({"n": {"$gte": 5, "$lt": 10}})] == [1]
    assert [d["id"] for d in things.find({"tags": "b"})] == [1, 2]
    assert [d["id"] for d in things.find({"meta.kind": "x"})] == [1, 3]
    assert [d["id"] for d in things.find({"$or": [{"id": 3}, {"n": 10}]})] == [2, 3]
    assert [d["id"] for d in things.find({"id": {"$nin": [1, 2]}})] == [3]
    assert things.distinct("meta.kind") == ["x", "y"]
    assert [d["id"] for d in things.find({}).sort("n", -1)] == [2, 1, 3]
    assert [d["id"] for d in things.find({}).skip(1).limit(1)] == [2]
    assert db.count("things", {"n": {"$ne": 5}}) == 2


def test_unsupported_logical_operator_is_a_read_failure(build_repository):
    repo = build_repository(groups=[{"id": 1, "name": "Blue"}])

    with pytest.raises(DataAccessError):
        repo.groups.find_many({"$nor": [{"id": 1}]})


def test_invalid_documents_do_not_hide_later_matches(build_repository):
    repo = build_repository(
        error_records=[
            error_doc("a", 1, 5),
            error_doc("a", 4, 2, protocol="valid"),
            error_doc("b", 3, 1),
            error_doc("c", 2, 2),
        ]
    )

    assert repo.error_bank.find_by_pattern("a").correction_protocol == "valid"
    assert [r.error_pattern for r in repo.error_bank.find_many({}, limit=2)] == ["a", "b"]
    assert [r.error_pattern for r in repo.error_bank.find_many({}, skip=1, limit=5)] == ["b", "c"]
