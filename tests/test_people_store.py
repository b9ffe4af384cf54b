import csv
import json
from datetime import date

import pytest

from modedhr.hr_enums import AcademicPosition, DepartmentPosition
from modedhr.hr_people import ProgramType, StudentStatus
from modedhr.hr_util import open_database
from modedhr.people_store import InstructorHRStore, StudentHRStore


@pytest.fixture
def db():
    connection = open_database(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def instructors(db):
    return InstructorHRStore(db)


@pytest.fixture
def students(db):
    return StudentHRStore(db)


def add_instructor(store, code="I001", **overrides):
    values = dict(
        instructor_code=code,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        start_date="2020-01-15",
        department="Computing",
        gender="F",
        citizen_id="CID-1",
        phone_number="0800000000",
        salary=50000.0,
        academic_position="assistant",
        department_position="head",
    )
    values.update(overrides)
    return store.add_instructor(**values)


def add_student(store, code="S001", advisor="I001", **overrides):
    values = dict(
        student_code=code,
        first_name="Bob",
        last_name="Builder",
        email="bob@example.com",
        start_date="2022-08-01",
        birth_date="2004-03-02",
        program="International",
        department="Computing",
        status="ACTIVE",
        gender="M",
        citizen_id="CID-2",
        phone_number="0811111111",
        advisor_code=advisor,
    )
    values.update(overrides)
    return store.add_student(**values)


def test_add_instructor_stores_hr_details(instructors):
    info = add_instructor(instructors)
    assert info.instructor_code == "I001"
    assert info.first_name == "Ada"
    assert info.start_date == date(2020, 1, 15)
    assert info.department == "Computing"
    assert info.salary == 50000.0
    assert info.academic_position is AcademicPosition.ASSISTANT_PROF
    assert info.department_position is DepartmentPosition.HEAD
    assert instructors.get("I001") == info


def test_add_instructor_bad_date_stores_nothing(instructors):
    with pytest.raises(ValueError, match="failed to parse start date"):
        add_instructor(instructors, start_date="15-01-2020")
    assert instructors.all() == []


def test_add_instructor_bad_position(instructors):
    with pytest.raises(ValueError, match="academic position"):
        add_instructor(instructors, academic_position="dean")
    with pytest.raises(ValueError, match="department position"):
        add_instructor(instructors, department_position="boss")
    assert instructors.all() == []


def test_add_instructor_twice_fails_and_rolls_back(instructors):
    add_instructor(instructors)
    with pytest.raises(ValueError, match="failed to add instructor"):
        add_instructor(instructors, first_name="Other")
    assert [i.first_name for i in instructors.all()] == ["Ada"]


def test_get_missing_instructor(instructors):
    with pytest.raises(LookupError):
        instructors.get("nobody")


def test_update_instructor_keeps_empty_values(instructors):
    original = add_instructor(instructors)
    updated = instructors.update_instructor_info("I001", "", "", "", "", "", "", "none", "none")
    assert updated == original


def test_update_instructor_changes_values(instructors):
    add_instructor(instructors)
    updated = instructors.update_instructor_info(
        "I001", "Grace", "", "grace@example.com", "", "CID-9", "", "professor", "deputy"
    )
    assert updated.first_name == "Grace"
    assert updated.last_name == "Lovelace"
    assert updated.email == "grace@example.com"
    assert updated.citizen_id == "CID-9"
    assert updated.academic_position is AcademicPosition.PROFESSOR
    assert updated.department_position is DepartmentPosition.DEPUTY
    assert updated.salary == 50000.0


def test_update_missing_instructor(instructors):
    with pytest.raises(LookupError, match="I404"):
        instructors.update_instructor_info("I404", "", "", "", "", "", "", "none", "none")


def test_migrate_restores_deleted_hr_record(instructors):
    add_instructor(instructors)
    assert instructors.migrate_instructor_records() == 0
    assert instructors.delete_instructor("I001") == 1
    assert instructors.all() == []
    assert instructors.migrate_instructor_records() == 1
    restored = instructors.get("I001")
    assert restored.first_name == "Ada"
    assert restored.gender == ""
    assert restored.academic_position is AcademicPosition.NONE


def test_delete_missing_instructor_removes_nothing(instructors):
    assert instructors.delete_instructor("nobody") == 0


def test_import_instructors_from_csv(instructors, tmp_path):
    add_instructor(instructors)
    path = tmp_path / "instructors.csv"
    path.write_text(
        "InstructorCode,Gender,CitizenID,PhoneNumber,AcademicPosition,DepartmentPosition\n"
        "I001,X,CID-7,,3,0\n",
        encoding="utf-8",
    )
    assert instructors.import_instructors(path) == 1
    info = instructors.get("I001")
    assert info.gender == "X"
    assert info.citizen_id == "CID-7"
    assert info.phone_number == "0800000000"
    assert info.academic_position is AcademicPosition.PROFESSOR
    assert info.department_position is DepartmentPosition.HEAD


def test_import_instructors_duplicate_code_rolls_back(instructors, tmp_path):
    before = add_instructor(instructors)
    path = tmp_path / "instructors.json"
    path.write_text(
        json.dumps([{"instructor_code": "I001", "gender": "X"}, {"instructor_code": "I001"}]),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="duplicate"):
        instructors.import_instructors(path)
    assert instructors.get("I001") == before


def test_import_unknown_instructor(instructors, tmp_path):
    path = tmp_path / "instructors.json"
    path.write_text(json.dumps([{"instructor_code": "I999"}]), encoding="utf-8")
    with pytest.raises(LookupError, match="I999"):
        instructors.import_instructors(path)


def test_export_instructors_json(instructors, tmp_path):
    add_instructor(instructors)
    add_instructor(instructors, code="I002", first_name="Alan")
    path = tmp_path / "out.json"
    assert instructors.export_instructors(path) == 2
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [row["instructor_code"] for row in data] == ["I001", "I002"]
    assert data[0]["start_date"] == "2020-01-15"
    assert data[0]["academic_position"] == int(AcademicPosition.ASSISTANT_PROF)


def test_export_then_import_instructors_round_trip(instructors, tmp_path):
    before = add_instructor(instructors)
    path = tmp_path / "out.csv"
    instructors.export_instructors(path)
    assert instructors.import_instructors(path) == 1
    assert instructors.get("I001") == before


def test_export_instructors_unsupported_format(instructors, tmp_path):
    with pytest.raises(ValueError, match="unsupported file format"):
        instructors.export_instructors(tmp_path / "out.txt")


def test_add_student_requires_existing_advisor(students):
    with pytest.raises(LookupError, match="I001"):
        add_student(students)
    assert students.all() == []


def test_add_student_stores_hr_details(db, students):
    add_instructor(InstructorHRStore(db))
    info = add_student(students)
    assert info.student_code == "S001"
    assert info.program is ProgramType.INTERNATIONAL
    assert info.status is StudentStatus.ACTIVE
    assert info.birth_date == date(2004, 3, 2)
    assert info.advisor_code == "I001"
    assert info.gender == "M"
    assert students.get("S001") == info


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"start_date": "2022/08/01"}, "start date"),
        ({"birth_date": "yesterday"}, "birth date"),
        ({"program": "regular"}, "program"),
        ({"status": "active"}, "status"),
    ],
)
def test_add_student_invalid_input(db, students, overrides, message):
    add_instructor(InstructorHRStore(db))
    with pytest.raises(ValueError, match=message):
        add_student(students, **overrides)
    assert students.all() == []


def test_update_student_info(db, students):
    add_instructor(InstructorHRStore(db))
    original = add_student(students)
    updated = students.update_student_info("S001", "Robert", "", "", "", "CID-5", "")
    assert updated.first_name == "Robert"
    assert updated.last_name == original.last_name
    assert updated.email == original.email
    assert updated.citizen_id == "CID-5"
    assert updated.advisor_code == "I001"
    assert updated.status is StudentStatus.ACTIVE


def test_update_missing_student(students):
    with pytest.raises(LookupError, match="S404"):
        students.update_student_info("S404", "", "", "", "", "", "")


def test_delete_and_migrate_student(db, students):
    add_instructor(InstructorHRStore(db))
    add_student(students)
    assert students.delete_student("S001") == 1
    assert students.all() == []
    assert students.migrate_student_records() == 1
    restored = students.get("S001")
    assert restored.first_name == "Bob"
    assert restored.gender == ""
    assert restored.advisor_code is None


def test_import_students_from_csv(db, students, tmp_path):
    add_instructor(InstructorHRStore(db))
    add_student(students)
    path = tmp_path / "students.csv"
    path.write_text("StudentCode,Gender,CitizenID,PhoneNumber\nS001,F,,0822222222\n", encoding="utf-8")
    assert students.import_students(path) == 1
    info = students.get("S001")
    assert info.gender == "F"
    assert info.citizen_id == "CID-2"
    assert info.phone_number == "0822222222"


def test_import_students_duplicate(db, students, tmp_path):
    add_instructor(InstructorHRStore(db))
    before = add_student(students)
    path = tmp_path / "students.csv"
    path.write_text("student_code,gender\nS001,F\nS001,X\n", encoding="utf-8")
    with pytest.raises(ValueError, match="duplicate"):
        students.import_students(path)
    assert students.get("S001") == before


def test_export_students_csv(db, students, tmp_path):
    add_instructor(InstructorHRStore(db))
    add_student(students)
    add_student(students, code="S002", first_name="Carol")
    path = tmp_path / "students.csv"
    assert students.export_students(path) == 2
    with open(path, newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["student_code"] for row in rows] == ["S001", "S002"]
    assert rows[1]["first_name"] == "Carol"
    assert rows[0]["advisor_code"] == "I001"
    assert rows[0]["birth_date"] == "2004-03-02"


def test_export_then_import_students_round_trip(db, students, tmp_path):
    add_instructor(InstructorHRStore(db))
    before = add_student(students)
    path = tmp_path / "students.json"
    students.export_students(path)
    assert students.import_students(path) == 1
    assert students.get("S001") == before