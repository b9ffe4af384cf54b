"""Students and instructors with the extra details kept by the HR office."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from modedhr.hr_enums import AcademicPosition, DepartmentPosition
from modedhr.hr_util import if_not_empty, if_not_zero


class StudentStatus(IntEnum):
    """Enrolment status of a student."""

    ACTIVE = 0
    GRADUATED = 1
    DROP = 2


class ProgramType(IntEnum):
    """Study programme of a student."""

    REGULAR = 0
    INTERNATIONAL = 1


_STATUS_NAMES = {
    StudentStatus.ACTIVE: "ACTIVE",
    StudentStatus.GRADUATED: "GRADUATED",
    StudentStatus.DROP: "DROP",
}

_STATUS_BY_NAME = {
    "ACTIVE": StudentStatus.ACTIVE,
    "Active": StudentStatus.ACTIVE,
    "GRADUATED": StudentStatus.GRADUATED,
    "Graduated": StudentStatus.GRADUATED,
    "DROP": StudentStatus.DROP,
    "Drop": StudentStatus.DROP,
}

_PROGRAM_NAMES = {
    ProgramType.REGULAR: "Regular",
    ProgramType.INTERNATIONAL: "International",
}

_PROGRAM_BY_NAME = {name: program for program, name in _PROGRAM_NAMES.items()}


def status_to_string(status: StudentStatus) -> str:
    """Return the name of ``status``; unknown values read as ``ACTIVE``."""
    return _STATUS_NAMES.get(status, "ACTIVE")


def parse_status(text: str) -> StudentStatus:
    """Return the status named by ``text`` (upper case or capitalised)."""
    try:
        return _STATUS_BY_NAME[text]
    except KeyError:
        raise ValueError(
            f"invalid status: {text} (must be ACTIVE, GRADUATED, or DROP)"
        ) from None


def program_type_to_string(program: ProgramType) -> str:
    """Return the name of ``program``; unknown values read as ``Unknown``."""
    return _PROGRAM_NAMES.get(program, "Unknown")


def parse_program_type(text: str) -> ProgramType:
    """Return the programme named by ``text``."""
    try:
        return _PROGRAM_BY_NAME[text]
    except KeyError:
        raise ValueError(
            f"invalid program type: {text} (must be Regular or International)"
        ) from None


@dataclass(kw_only=True)
class Instructor:
    """Core details of an instructor."""

    instructor_code: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    start_date: date | None = None
    department: str | None = None


@dataclass(kw_only=True)
class Student:
    """Core details of a student."""

    student_code: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    start_date: date | None = None
    birth_date: date | None = None
    program: ProgramType = ProgramType.REGULAR
    department: str = ""
    status: StudentStatus | None = None


@dataclass(kw_only=True)
class InstructorInfo(Instructor):
    """An instructor together with HR details."""

    id: int | None = None
    gender: str = ""
    citizen_id: str = ""
    phone_number: str = ""
    salary: float = 0.0
    academic_position: AcademicPosition = AcademicPosition.NONE
    department_position: DepartmentPosition = DepartmentPosition.NONE

    def updated(
        self,
        first_name: str,
        last_name: str,
        email: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
        academic_position: AcademicPosition,
        department_position: DepartmentPosition,
    ) -> InstructorInfo:
        """Return a copy with the given values; empty strings and NONE positions keep the current ones."""
        return InstructorInfo(
            id=self.id,
            instructor_code=self.instructor_code,
            first_name=if_not_empty(first_name, self.first_name),
            last_name=if_not_empty(last_name, self.last_name),
            email=if_not_empty(email, self.email),
            start_date=self.start_date,
            department=self.department,
            gender=if_not_empty(gender, self.gender),
            citizen_id=if_not_empty(citizen_id, self.citizen_id),
            phone_number=if_not_empty(phone_number, self.phone_number),
            salary=self.salary,
            academic_position=AcademicPosition(
                if_not_zero(int(academic_position), int(self.academic_position))
            ),
            department_position=DepartmentPosition(
                if_not_zero(int(department_position), int(self.department_position))
            ),
        )


@dataclass(kw_only=True)
class StudentInfo(Student):
    """A student together with HR details and an advisor."""

    gender: str = ""
    citizen_id: str = ""
    phone_number: str = ""
    advisor_code: str | None = None
    advisor: Instructor | None = None

    def updated(
        self,
        first_name: str,
        last_name: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
        email: str,
    ) -> StudentInfo:
        """Return a copy with the given values; empty strings keep the current ones."""
        return StudentInfo(
            student_code=self.student_code,
            first_name=if_not_empty(first_name, self.first_name),
            last_name=if_not_empty(last_name, self.last_name),
            email=if_not_empty(email, self.email),
            start_date=self.start_date,
            birth_date=self.birth_date,
            program=self.program,
            department=self.department,
            status=self.status,
            gender=if_not_empty(gender, self.gender),
            citizen_id=if_not_empty(citizen_id, self.citizen_id),
            phone_number=if_not_empty(phone_number, self.phone_number),
            advisor_code=self.advisor_code,
        )