"""HR records of instructors and students kept in an SQLite database."""

from __future__ import annotations

import csv
import json
import logging
import os
import re
import sqlite3
from collections.abc import Callable, Iterable, Mapping
from dataclasses import fields
from datetime import date, datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar, Union

from modedhr.deserializer import FileDeserializer
from modedhr.hr_enums import (
    AcademicPosition,
    DepartmentPosition,
    parse_academic_position,
    parse_department_position,
)
from modedhr.hr_people import (
    InstructorInfo,
    ProgramType,
    StudentInfo,
    StudentStatus,
    parse_program_type,
    parse_status,
)
from modedhr.hr_util import TransactionManager

logger = logging.getLogger(__name__)

PathType = Union[str, "os.PathLike[str]"]
E = TypeVar("E", bound=IntEnum)

_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

_INSTRUCTORS_SCHEMA = """
CREATE TABLE IF NOT EXISTS instructors (
    instructor_code TEXT PRIMARY KEY,
    first_name TEXT,
    last_name TEXT,
    email TEXT,
    start_date TEXT,
    department TEXT
)
"""

_INSTRUCTOR_INFOS_SCHEMA = """
CREATE TABLE IF NOT EXISTS instructor_infos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    instructor_code TEXT UNIQUE NOT NULL,
    first_name TEXT,
    last_name TEXT,
    email TEXT,
    start_date TEXT,
    department TEXT,
    gender TEXT,
    citizen_id TEXT,
    phone_number TEXT,
    salary REAL DEFAULT 0,
    academic_position INTEGER DEFAULT 0,
    department_position INTEGER DEFAULT 0
)
"""

_STUDENTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS students (
    student_code TEXT PRIMARY KEY,
    first_name TEXT,
    last_name TEXT,
    email TEXT,
    start_date TEXT,
    birth_date TEXT,
    program INTEGER,
    department TEXT,
    status INTEGER
)
"""

_STUDENT_INFOS_SCHEMA = """
CREATE TABLE IF NOT EXISTS student_infos (
    student_code TEXT PRIMARY KEY,
    first_name TEXT,
    last_name TEXT,
    email TEXT,
    start_date TEXT,
    birth_date TEXT,
    program INTEGER,
    department TEXT,
    status INTEGER,
    gender TEXT,
    citizen_id TEXT,
    phone_number TEXT,
    advisor_code TEXT
)
"""

_INSTRUCTOR_COLUMNS = (
    "instructor_code",
    "first_name",
    "last_name",
    "email",
    "start_date",
    "department",
)
_INSTRUCTOR_INFO_COLUMNS = (
    "id",
    *_INSTRUCTOR_COLUMNS,
    "gender",
    "citizen_id",
    "phone_number",
    "salary",
    "academic_position",
    "department_position",
)
_STUDENT_COLUMNS = (
    "student_code",
    "first_name",
    "last_name",
    "email",
    "start_date",
    "birth_date",
    "program",
    "department",
    "status",
)
_STUDENT_INFO_COLUMNS = (
    *_STUDENT_COLUMNS,
    "gender",
    "citizen_id",
    "phone_number",
    "advisor_code",
)

# Columns written even when they hold a zero value, as long as they are set.
_INSTRUCTOR_KEEP = frozenset({"department"})
_STUDENT_KEEP = frozenset({"status", "advisor_code"})


def _parse_date(text: str, what: str) -> date:
    try:
        if not _DATE.fullmatch(text):
            raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"failed to parse {what}: {exc}") from exc


def _parse_with(parser: Callable[[str], Any], text: str, what: str) -> Any:
    try:
        return parser(text)
    except ValueError as exc:
        raise ValueError(f"failed to parse {what}: {exc}") from exc


def _to_column(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, IntEnum):
        return int(value)
    return value


def _to_date(value: Any) -> date | None:
    return date.fromisoformat(value) if value else None


def _text(value: Any) -> str:
    return "" if value is None else value


def _update(
    connection: sqlite3.Connection,
    table: str,
    key_column: str,
    values: Mapping[str, Any],
    keep: frozenset[str],
) -> None:
    """Write only the set, non-zero values of ``values`` to the row with the key."""
    assignments = {
        column: _to_column(value)
        for column, value in values.items()
        if column != key_column
        and value is not None
        and (column in keep or (value != "" and value != 0))
    }
    if not assignments:
        return
    clause = ", ".join(f"{column} = ?" for column in assignments)
    connection.execute(
        f"UPDATE {table} SET {clause} WHERE {key_column} = ?",
        (*assignments.values(), values[key_column]),
    )


def _write_records(path: PathType, names: list[str], records: list[dict[str, Any]]) -> None:
    extension = Path(path).suffix.lower()
    if extension == ".csv":
        with open(path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=names)
            writer.writeheader()
            writer.writerows(records)
    elif extension == ".json":
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(records, handle, indent=2)
    else:
        raise ValueError(f"unsupported file format: {extension}")


def _read_records(path: PathType) -> list[Mapping[str, Any]]:
    data = FileDeserializer(path).deserialize()
    if not isinstance(data, list):
        raise ValueError(f"expected a list of records in {path}")
    records = []
    for item in data:
        if item is None:
            continue
        if not isinstance(item, Mapping):
            raise ValueError(f"expected a record object in {path}, got {type(item).__name__}")
        records.append(item)
    return records


def _field(record: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = record.get(name)
        if value is not None:
            return value if isinstance(value, str) else str(value)
    return ""


def _position(text: str, enum_type: type[E], parser: Callable[[str], E]) -> E:
    text = text.strip()
    if not text:
        return enum_type(0)
    if text.isdigit():
        try:
            return enum_type(int(text))
        except ValueError:
            raise ValueError(f"invalid {enum_type.__name__}: {text}") from None
    return parser(text)


def _unique_by_code(records: Iterable[Mapping[str, Any]], *names: str) -> dict[str, Mapping[str, Any]]:
    by_code: dict[str, Mapping[str, Any]] = {}
    for record in records:
        code = _field(record, *names)
        if code in by_code:
            raise ValueError(f"duplicate code found in import file: {code}")
        by_code[code] = record
    return by_code


def _instructor_info_from_row(row: Any) -> InstructorInfo:
    values = dict(zip(_INSTRUCTOR_INFO_COLUMNS, tuple(row)))
    return InstructorInfo(
        id=values["id"],
        instructor_code=values["instructor_code"],
        first_name=_text(values["first_name"]),
        last_name=_text(values["last_name"]),
        email=_text(values["email"]),
        start_date=_to_date(values["start_date"]),
        department=values["department"],
        gender=_text(values["gender"]),
        citizen_id=_text(values["citizen_id"]),
        phone_number=_text(values["phone_number"]),
        salary=float(values["salary"] or 0),
        academic_position=AcademicPosition(values["academic_position"] or 0),
        department_position=DepartmentPosition(values["department_position"] or 0),
    )


def _student_info_from_row(row: Any) -> StudentInfo:
    values = dict(zip(_STUDENT_INFO_COLUMNS, tuple(row)))
    status = values["status"]
    return StudentInfo(
        student_code=values["student_code"],
        first_name=_text(values["first_name"]),
        last_name=_text(values["last_name"]),
        email=_text(values["email"]),
        start_date=_to_date(values["start_date"]),
        birth_date=_to_date(values["birth_date"]),
        program=ProgramType(values["program"] or 0),
        department=_text(values["department"]),
        status=StudentStatus(status) if status is not None else None,
        gender=_text(values["gender"]),
        citizen_id=_text(values["citizen_id"]),
        phone_number=_text(values["phone_number"]),
        advisor_code=values["advisor_code"],
    )


def _instructor_values(info: InstructorInfo) -> dict[str, Any]:
    return {column: getattr(info, column) for column in _INSTRUCTOR_INFO_COLUMNS[1:]}


def _student_values(info: StudentInfo) -> dict[str, Any]:
    return {column: getattr(info, column) for column in _STUDENT_INFO_COLUMNS}


class InstructorHRStore:
    """Instructors and their HR details."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db
        self._transactions = TransactionManager(db)
        db.execute(_INSTRUCTORS_SCHEMA)
        db.execute(_INSTRUCTOR_INFOS_SCHEMA)

    def _find(self, instructor_code: str) -> InstructorInfo | None:
        row = self._db.execute(
            f"SELECT {', '.join(_INSTRUCTOR_INFO_COLUMNS)} FROM instructor_infos "
            "WHERE instructor_code = ?",
            (instructor_code,),
        ).fetchone()
        return None if row is None else _instructor_info_from_row(row)

    def get(self, instructor_code: str) -> InstructorInfo:
        """Return the instructor with ``instructor_code``; raise ``LookupError`` if absent."""
        info = self._find(instructor_code)
        if info is None:
            raise LookupError(f"instructor {instructor_code} not found")
        return info

    def all(self) -> list[InstructorInfo]:
        """Return every instructor's HR record."""
        rows = self._db.execute(
            f"SELECT {', '.join(_INSTRUCTOR_INFO_COLUMNS)} FROM instructor_infos ORDER BY id"
        )
        return [_instructor_info_from_row(row) for row in rows]

    def _retrieve(self, instructor_code: str) -> InstructorInfo:
        try:
            return self.get(instructor_code)
        except LookupError as exc:
            raise LookupError(
                f"error retrieving instructor with ID {instructor_code}: {exc}"
            ) from exc

    def add_instructor(
        self,
        instructor_code: str,
        first_name: str,
        last_name: str,
        email: str,
        start_date: str,
        department: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
        salary: float,
        academic_position: str,
        department_position: str,
    ) -> InstructorInfo:
        """Add an instructor with HR details; dates are YYYY-MM-DD, positions are names."""
        with self._transactions.transaction() as connection:
            started = _parse_date(start_date, "start date")
            academic = _parse_with(parse_academic_position, academic_position, "academic position")
            departmental = _parse_with(
                parse_department_position, department_position, "department position"
            )
            try:
                connection.execute(
                    f"INSERT INTO instructors ({', '.join(_INSTRUCTOR_COLUMNS)}) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (instructor_code, first_name, last_name, email, started.isoformat(), department),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"failed to add instructor: {exc}") from exc
            self.migrate_instructor_records()
            info = InstructorInfo(
                instructor_code=instructor_code,
                first_name=first_name,
                last_name=last_name,
                email=email,
                start_date=started,
                department=department,
                gender=gender,
                citizen_id=citizen_id,
                phone_number=phone_number,
                salary=salary,
                academic_position=academic,
                department_position=departmental,
            )
            _update(connection, "instructor_infos", "instructor_code", _instructor_values(info), _INSTRUCTOR_KEEP)
        return self.get(instructor_code)

    def update_instructor_info(
        self,
        instructor_code: str,
        first_name: str,
        last_name: str,
        email: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
        academic_position: str,
        department_position: str,
    ) -> InstructorInfo:
        """Change an instructor's HR details; empty values keep the current ones."""
        with self._transactions.transaction() as connection:
            academic = _parse_with(parse_academic_position, academic_position, "academic position")
            departmental = _parse_with(
                parse_department_position, department_position, "department position"
            )
            current = self._retrieve(instructor_code)
            self.migrate_instructor_records()
            updated = current.updated(
                first_name, last_name, email, gender, citizen_id, phone_number, academic, departmental
            )
            _update(connection, "instructor_infos", "instructor_code", _instructor_values(updated), _INSTRUCTOR_KEEP)
        logger.info("Instructor updated successfully!")
        return self.get(instructor_code)

    def migrate_instructor_records(self) -> int:
        """Create an HR record for every instructor that lacks one; return how many."""
        columns = ", ".join(_INSTRUCTOR_COLUMNS)
        with self._transactions.transaction() as connection:
            cursor = connection.execute(
                f"INSERT INTO instructor_infos ({columns}, gender, citizen_id, phone_number, "
                "salary, academic_position, department_position) "
                f"SELECT {columns}, '', '', '', 0, 0, 0 FROM instructors AS base "
                "WHERE NOT EXISTS (SELECT 1 FROM instructor_infos AS info "
                "WHERE info.instructor_code = base.instructor_code)"
            )
            return cursor.rowcount

    def delete_instructor(self, instructor_code: str) -> int:
        """Delete an instructor's HR record; return the number of rows removed."""
        with self._transactions.transaction() as connection:
            cursor = connection.execute(
                "DELETE FROM instructor_infos WHERE instructor_code = ?", (instructor_code,)
            )
            return cursor.rowcount

    def import_instructors(self, path: PathType) -> int:
        """Update HR details of existing instructors from a CSV or JSON file."""
        with self._transactions.transaction() as connection:
            records = _unique_by_code(_read_records(path), "instructor_code", "InstructorCode")
            for code, record in records.items():
                current = self._retrieve(code)
                updated = current.updated(
                    current.first_name,
                    current.last_name,
                    current.email,
                    _field(record, "gender", "Gender"),
                    _field(record, "citizen_id", "CitizenID"),
                    _field(record, "phone_number", "PhoneNumber"),
                    _position(
                        _field(record, "academic_position", "AcademicPosition"),
                        AcademicPosition,
                        parse_academic_position,
                    ),
                    _position(
                        _field(record, "department_position", "DepartmentPosition"),
                        DepartmentPosition,
                        parse_department_position,
                    ),
                )
                _update(connection, "instructor_infos", "instructor_code", _instructor_values(updated), _INSTRUCTOR_KEEP)
        return len(records)

    def export_instructors(self, path: PathType) -> int:
        """Write every instructor to a CSV or JSON file and return how many were written."""
        instructors = self.all()
        names = [f.name for f in fields(InstructorInfo)]
        records = [
            {name: _to_column(getattr(info, name)) for name in names} for info in instructors
        ]
        _write_records(path, names, records)
        logger.info("Exported %d instructors to %s", len(instructors), path)
        return len(instructors)


class StudentHRStore:
    """Students and their HR details."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db
        self._transactions = TransactionManager(db)
        self._instructors = InstructorHRStore(db)
        db.execute(_STUDENTS_SCHEMA)
        db.execute(_STUDENT_INFOS_SCHEMA)

    def get(self, student_code: str) -> StudentInfo:
        """Return the student with ``student_code``; raise ``LookupError`` if absent."""
        row = self._db.execute(
            f"SELECT {', '.join(_STUDENT_INFO_COLUMNS)} FROM student_infos WHERE student_code = ?",
            (student_code,),
        ).fetchone()
        if row is None:
            raise LookupError(f"student {student_code} not found")
        return _student_info_from_row(row)

    def all(self) -> list[StudentInfo]:
        """Return every student's HR record."""
        rows = self._db.execute(
            f"SELECT {', '.join(_STUDENT_INFO_COLUMNS)} FROM student_infos ORDER BY rowid"
        )
        return [_student_info_from_row(row) for row in rows]

    def _retrieve(self, student_code: str) -> StudentInfo:
        try:
            return self.get(student_code)
        except LookupError as exc:
            raise LookupError(f"error retrieving student with ID {student_code}: {exc}") from exc

    def add_student(
        self,
        student_code: str,
        first_name: str,
        last_name: str,
        email: str,
        start_date: str,
        birth_date: str,
        program: str,
        department: str,
        status: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
        advisor_code: str,
    ) -> StudentInfo:
        """Add a student with HR details and an existing instructor as advisor."""
        started = _parse_date(start_date, "start date")
        born = _parse_date(birth_date, "birth date")
        programme = _parse_with(parse_program_type, program, "program")
        enrolment = _parse_with(parse_status, status, "status")
        try:
            self._instructors.get(advisor_code)
        except LookupError as exc:
            raise LookupError(
                f"failed to retrieve instructor with code {advisor_code}: {exc}"
            ) from exc

        with self._transactions.transaction() as connection:
            try:
                connection.execute(
                    f"INSERT INTO students ({', '.join(_STUDENT_COLUMNS)}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        student_code,
                        first_name,
                        last_name,
                        email,
                        started.isoformat(),
                        born.isoformat(),
                        int(programme),
                        department,
                        int(enrolment),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"insert failed in common model: {exc}") from exc
            self.migrate_student_records()
            info = StudentInfo(
                student_code=student_code,
                first_name=first_name,
                last_name=last_name,
                email=email,
                start_date=started,
                birth_date=born,
                program=programme,
                department=department,
                status=enrolment,
                gender=gender,
                citizen_id=citizen_id,
                phone_number=phone_number,
                advisor_code=advisor_code,
            )
            _update(connection, "student_infos", "student_code", _student_values(info), _STUDENT_KEEP)
        return self.get(student_code)

    def update_student_info(
        self,
        student_code: str,
        first_name: str,
        last_name: str,
        email: str,
        gender: str,
        citizen_id: str,
        phone_number: str,
    ) -> StudentInfo:
        """Change a student's HR details; empty values keep the current ones."""
        with self._transactions.transaction() as connection:
            current = self._retrieve(student_code)
            self.migrate_student_records()
            updated = current.updated(first_name, last_name, gender, citizen_id, phone_number, email)
            _update(connection, "student_infos", "student_code", _student_values(updated), _STUDENT_KEEP)
        return self.get(student_code)

    def migrate_student_records(self) -> int:
        """Create an HR record for every student that lacks one; return how many."""
        columns = ", ".join(_STUDENT_COLUMNS)
        with self._transactions.transaction() as connection:
            cursor = connection.execute(
                f"INSERT INTO student_infos ({columns}, gender, citizen_id, phone_number) "
                f"SELECT {columns}, '', '', '' FROM students AS base "
                "WHERE NOT EXISTS (SELECT 1 FROM student_infos AS info "
                "WHERE info.student_code = base.student_code)"
            )
            return cursor.rowcount

    def delete_student(self, student_code: str) -> int:
        """Delete a student's HR record; return the number of rows removed."""
        with self._transactions.transaction() as connection:
            cursor = connection.execute(
                "DELETE FROM student_infos WHERE student_code = ?", (student_code,)
            )
            return cursor.rowcount

    def import_students(self, path: PathType) -> int:
        """Update HR details of existing students from a CSV or JSON file."""
        with self._transactions.transaction() as connection:
            records = _unique_by_code(_read_records(path), "student_code", "StudentCode")
            for code, record in records.items():
                current = self._retrieve(code)
                updated = current.updated(
                    current.first_name,
                    current.last_name,
                    _field(record, "gender", "Gender"),
                    _field(record, "citizen_id", "CitizenID"),
                    _field(record, "phone_number", "PhoneNumber"),
                    current.email,
                )
                _update(connection, "student_infos", "student_code", _student_values(updated), _STUDENT_KEEP)
        return len(records)

    def export_students(self, path: PathType) -> int:
        """Write every student to a CSV or JSON file and return how many were written."""
        students = self.all()
        names = list(_STUDENT_INFO_COLUMNS)
        records = [
            {name: _to_column(getattr(info, name)) for name in names} for info in students
        ]
        _write_records(path, names, records)
        logger.info("Exported %d students to %s", len(students), path)
        return len(students)