from datetime import date

import pytest

from modedhr.hr_enums import AcademicPosition, DepartmentPosition
from modedhr.hr_people import (
    Instructor,
    InstructorInfo,
    ProgramType,
    StudentInfo,
    StudentStatus,
    parse_program_type,
    parse_status,
    program_type_to_string,
    status_to_string,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ACTIVE", StudentStatus.ACTIVE),
        ("Active", StudentStatus.ACTIVE),
        ("GRADUATED", StudentStatus.GRADUATED),
        ("Graduated", StudentStatus.GRADUATED),
        ("DROP", StudentStatus.DROP),
        ("Drop", StudentStatus.DROP),
    ],
)
def test_parse_status(text, expected):
    assert parse_status(text) is expected


def test_parse_status_rejects_other_spellings():
    with pytest.raises(ValueError, match="invalid status: active"):
        parse_status("active")


@pytest.mark.parametrize("status", list(StudentStatus))
def test_status_round_trip(status):
    assert parse_status(status_to_string(status)) is status


def test_unknown_status_reads_as_active():
    assert status_to_string(99) == "ACTIVE"


def test_program_type_parsing():
    assert parse_program_type("Regular") is ProgramType.REGULAR
    assert parse_program_type("International") is ProgramType.INTERNATIONAL
    with pytest.raises(ValueError, match="invalid program type: regular"):
        parse_program_type("regular")


@pytest.mark.parametrize("program", list(ProgramType))
def test_program_round_trip(program):
    assert parse_program_type(program_type_to_string(program)) is program


def test_unknown_program_reads_as_unknown():
    assert program_type_to_string(7) == "Unknown"


def _instructor_info():
    return InstructorInfo(
        id=3,
        instructor_code="T001",
        first_name="Ann",
        last_name="Lee",
        email="ann@example.com",
        start_date=date(2020, 1, 6),
        department="Physics",
        gender="F",
        citizen_id="C-1",
        phone_number="0800000000",
        salary=42000.0,
        academic_position=AcademicPosition.ASSOCIATE_PROF,
        department_position=DepartmentPosition.DEPUTY,
    )


def test_instructor_updated_keeps_values_for_empty_input():
    original = _instructor_info()
    updated = original.updated(
        "", "", "", "", "", "", AcademicPosition.NONE, DepartmentPosition.NONE
    )
    assert updated == original
    assert updated is not original


def test_instructor_updated_overrides_given_values():
    original = _instructor_info()
    updated = original.updated(
        "Anna", "", "anna@example.com", "", "C-2", "", AcademicPosition.PROFESSOR,
        DepartmentPosition.HEAD,
    )
    assert updated.first_name == "Anna"
    assert updated.last_name == "Lee"
    assert updated.email == "anna@example.com"
    assert updated.citizen_id == "C-2"
    assert updated.academic_position is AcademicPosition.PROFESSOR
    assert updated.department_position is DepartmentPosition.HEAD
    assert updated.salary == original.salary
    assert updated.start_date == original.start_date
    assert original.first_name == "Ann"


def _student_info():
    return StudentInfo(
        student_code="65010001234",
        first_name="Bo",
        last_name="Chan",
        email="bo@example.com",
        start_date=date(2022, 8, 1),
        birth_date=date(2004, 2, 29),
        program=ProgramType.INTERNATIONAL,
        department="CE",
        status=StudentStatus.ACTIVE,
        gender="M",
        citizen_id="C-9",
        phone_number="0811111111",
        advisor_code="T001",
        advisor=Instructor(instructor_code="T001"),
    )


def test_student_updated_keeps_and_overrides():
    original = _student_info()
    updated = original.updated("", "Chen", "", "", "0822222222", "")
    assert updated.first_name == "Bo"
    assert updated.last_name == "Chen"
    assert updated.phone_number == "0822222222"
    assert updated.email == original.email
    assert updated.birth_date == original.birth_date
    assert updated.program is ProgramType.INTERNATIONAL
    assert updated.status is StudentStatus.ACTIVE
    assert updated.advisor_code == "T001"
    assert updated.advisor is None