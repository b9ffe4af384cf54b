from datetime import date

import pytest

from modedhr.deserializer import FileDeserializer
from modedhr.hr_requests import (
    RequestLeaveInstructor,
    RequestLeaveStudent,
    RequestResignationInstructor,
    Role,
)
from modedhr.hr_review import ReviewError
from modedhr.hr_util import open_database
from modedhr.request_store import LeaveRequestStore, ResignationRequestStore


@pytest.fixture
def db():
    connection = open_database(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def student_leaves(db):
    return LeaveRequestStore(db, Role.STUDENT)


@pytest.fixture
def student_resignations(db):
    return ResignationRequestStore(db, Role.STUDENT)


def test_submit_leave_round_trip(student_leaves):
    created = student_leaves.submit("65010001", "sick", "fever", "2024-05-01")
    assert created.id is not None
    assert created.status == "Pending"
    fetched = student_leaves.get(created.id)
    assert fetched == created
    assert isinstance(fetched, RequestLeaveStudent)
    assert fetched.leave_date == date(2024, 5, 1)
    assert fetched.student_code == "65010001"


def test_submit_leave_missing_fields(student_leaves):
    with pytest.raises(ValueError, match="missing parameters"):
        student_leaves.submit("65010001", "", "fever", "2024-05-01")
    assert student_leaves.all() == []


def test_submit_leave_bad_date_stores_nothing(student_leaves):
    with pytest.raises(ValueError, match="invalid date format"):
        student_leaves.submit("65010001", "sick", "fever", "01-05-2024")
    assert student_leaves.all() == []


def test_submit_requires_id(student_leaves):
    with pytest.raises(ValueError, match="ID parameter is required"):
        student_leaves.submit("", "sick", "fever", "2024-05-01")


def test_review_approve_persists(student_leaves):
    created = student_leaves.submit("65010001", "sick", "fever", "2024-05-01")
    reviewed = student_leaves.review(str(created.id), "approve", "ignored")
    assert reviewed.status == "approve"
    stored = student_leaves.get(created.id)
    assert stored.status == "approve"
    assert stored.reason == "fever"


def test_review_reject_records_reason(student_leaves):
    created = student_leaves.submit("65010001", "sick", "fever", "2024-05-01")
    student_leaves.review(str(created.id), "REJECT", "no documents")
    stored = student_leaves.get(created.id)
    assert stored.status == "reject"
    assert stored.reason == "no documents"
    assert len(student_leaves.all()) == 1


def test_review_errors(student_leaves):
    created = student_leaves.submit("65010001", "sick", "fever", "2024-05-01")
    with pytest.raises(ReviewError, match="invalid request ID"):
        student_leaves.review("abc", "approve", "")
    with pytest.raises(ReviewError, match="failed to fetch request"):
        student_leaves.review("999", "approve", "")
    with pytest.raises(ReviewError, match="invalid action"):
        student_leaves.review(str(created.id), "maybe", "")
    assert student_leaves.get(created.id).status == "Pending"


def test_by_owner_filters(student_leaves):
    first = student_leaves.submit("A1", "sick", "fever", "2024-05-01")
    student_leaves.submit("B2", "personal", "trip", "2024-05-02")
    third = student_leaves.submit("A1", "sick", "cold", "2024-05-03")
    assert [r.id for r in student_leaves.by_owner("A1")] == [first.id, third.id]
    assert student_leaves.by_owner("nobody") == []


def test_instructor_leaves_are_separate(db, student_leaves):
    instructor_leaves = LeaveRequestStore(db, Role.INSTRUCTOR)
    created = instructor_leaves.submit("T001", "sick", "flu", "2024-06-10")
    assert isinstance(created, RequestLeaveInstructor)
    assert instructor_leaves.get(created.id).instructor_code == "T001"
    assert student_leaves.all() == []


def test_get_missing_raises(student_leaves):
    with pytest.raises(LookupError):
        student_leaves.get(42)


def test_export_json_round_trip(tmp_path, student_leaves):
    student_leaves.submit("A1", "sick", "fever", "2024-05-01")
    student_leaves.submit("B2", "personal", "trip", "2024-05-02")
    path = tmp_path / "leaves.json"
    assert student_leaves.export(path) == 2
    records = FileDeserializer(path).deserialize()
    assert [r["student_code"] for r in records] == ["A1", "B2"]
    assert records[0]["leave_date"] == "2024-05-01"


def test_export_csv_round_trip(tmp_path, student_leaves):
    student_leaves.submit("A1", "sick", "fever", "2024-05-01")
    path = tmp_path / "leaves.csv"
    assert student_leaves.export(path) == 1
    rows = FileDeserializer(path).deserialize()
    assert len(rows) == 1
    assert rows[0]["reason"] == "fever"
    assert rows[0]["status"] == "Pending"


def test_export_unsupported_format(tmp_path, student_leaves):
    with pytest.raises(ValueError, match="unsupported file format"):
        student_leaves.export(tmp_path / "leaves.txt")


def test_resignation_submit_round_trip(student_resignations):
    created = student_resignations.submit("65010001", "moving abroad")
    fetched = student_resignations.get(created.id)
    assert fetched == created
    assert fetched.status == "Pending"


def test_resignation_requires_reason(student_resignations):
    with pytest.raises(ValueError, match="missing Reason"):
        student_resignations.submit("65010001", "")
    assert student_resignations.all() == []


def test_resignation_all_newest_first_and_paging(student_resignations):
    ids = [student_resignations.submit(f"S{i}", "reason").id for i in range(4)]
    newest_first = list(reversed(ids))
    assert [r.id for r in student_resignations.all()] == newest_first
    assert [r.id for r in student_resignations.all(2, 0)] == newest_first[:2]
    assert [r.id for r in student_resignations.all(2, 1)] == newest_first[1:3]
    assert [r.id for r in student_resignations.all(0, 3)] == newest_first[3:]


def test_instructor_resignation_review(db):
    store = ResignationRequestStore(db, Role.INSTRUCTOR)
    created = store.submit("T001", "retiring")
    assert isinstance(created, RequestResignationInstructor)
    store.review(str(created.id), "reject", "contract not finished")
    stored = store.get(created.id)
    assert stored.status == "reject"
    assert stored.reason == "contract not finished"
    assert stored.instructor_code == "T001"