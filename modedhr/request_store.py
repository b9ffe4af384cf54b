"""Storage and review of leave and resignation requests from students and instructors."""

from __future__ import annotations

import csv
import json
import logging
import os
import sqlite3
from dataclasses import asdict, dataclass, fields
from datetime import date
from pathlib import Path
from typing import Any, Union

from modedhr.hr_requests import (
    CreateRequestParams,
    RequestLeaveInstructor,
    RequestLeaveStudent,
    RequestResignationInstructor,
    RequestResignationStudent,
    RequestType,
    Role,
    create_request,
)
from modedhr.hr_review import review_request
from modedhr.hr_util import TransactionManager

logger = logging.getLogger(__name__)

LeaveRequest = Union[RequestLeaveStudent, RequestLeaveInstructor]
ResignationRequest = Union[RequestResignationStudent, RequestResignationInstructor]


@dataclass(frozen=True)
class _Table:
    name: str
    owner_column: str
    model: type
    columns: tuple[str, ...]
    schema: str


def _leave_table(name: str, owner: str, model: type) -> _Table:
    return _Table(
        name=name,
        owner_column=owner,
        model=model,
        columns=("id", "status", "leave_type", "reason", "leave_date", owner),
        schema=(
            f"CREATE TABLE IF NOT EXISTS {name} ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "status TEXT DEFAULT 'Pending', "
            "leave_type TEXT, "
            "reason TEXT, "
            "leave_date TEXT, "
            f"{owner} TEXT NOT NULL)"
        ),
    )


def _resignation_table(name: str, owner: str, model: type) -> _Table:
    return _Table(
        name=name,
        owner_column=owner,
        model=model,
        columns=("id", "reason", "status", owner),
        schema=(
            f"CREATE TABLE IF NOT EXISTS {name} ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "reason TEXT, "
            "status TEXT DEFAULT 'Pending', "
            f"{owner} TEXT NOT NULL DEFAULT '')"
        ),
    )


_LEAVE_TABLES = {
    Role.STUDENT: _leave_table("leave_requests_student", "student_code", RequestLeaveStudent),
    Role.INSTRUCTOR: _leave_table(
        "request_leave_instructors", "instructor_code", RequestLeaveInstructor
    ),
}

_RESIGNATION_TABLES = {
    Role.STUDENT: _resignation_table(
        "request_resignation_students", "student_code", RequestResignationStudent
    ),
    Role.INSTRUCTOR: _resignation_table(
        "request_resignation_instructors", "instructor_code", RequestResignationInstructor
    ),
}


def _to_column(value: Any) -> Any:
    return value.isoformat() if isinstance(value, date) else value


class _RequestStore:
    """Common persistence of one kind of request in an SQLite table."""

    def __init__(self, db: sqlite3.Connection, table: _Table) -> None:
        self._db = db
        self._table = table
        self._transactions = TransactionManager(db)
        db.execute(table.schema)

    @property
    def _select(self) -> str:
        return f"SELECT {', '.join(self._table.columns)} FROM {self._table.name}"

    def _from_row(self, row) -> Any:
        values = dict(zip(self._table.columns, tuple(row)))
        if "leave_date" in values and values["leave_date"]:
            values["leave_date"] = date.fromisoformat(values["leave_date"])
        for key in ("reason", "status", "leave_type"):
            if key in values and values[key] is None:
                values[key] = ""
        return self._table.model(**values)

    def _save(self, request: Any) -> None:
        data_columns = self._table.columns[1:]
        values = tuple(_to_column(getattr(request, column)) for column in data_columns)
        with self._transactions.transaction() as connection:
            if request.id is None:
                placeholders = ", ".join("?" for _ in data_columns)
                cursor = connection.execute(
                    f"INSERT INTO {self._table.name} ({', '.join(data_columns)}) "
                    f"VALUES ({placeholders})",
                    values,
                )
                request.id = cursor.lastrowid
            else:
                placeholders = ", ".join("?" for _ in self._table.columns)
                connection.execute(
                    f"INSERT OR REPLACE INTO {self._table.name} "
                    f"({', '.join(self._table.columns)}) VALUES ({placeholders})",
                    (request.id, *values),
                )

    def _get(self, request_id: int) -> Any:
        row = self._db.execute(self._select + " WHERE id = ?", (request_id,)).fetchone()
        if row is None:
            raise LookupError(f"request {request_id} not found")
        return self._from_row(row)

    def _review(self, request_id: str, action: str, reason: str) -> Any:
        return review_request(request_id, action, reason, self._get, self._save)


class LeaveRequestStore(_RequestStore):
    """Leave requests of students or of instructors, chosen by ``role``."""

    def __init__(self, db: sqlite3.Connection, role: Role) -> None:
        super().__init__(db, _LEAVE_TABLES[role])
        self.role = role

    def submit(self, code: str, leave_type: str, reason: str, date_str: str) -> LeaveRequest:
        """Record a new pending leave request for a YYYY-MM-DD date and return it."""
        with self._transactions.transaction():
            params = CreateRequestParams(
                id=code, leave_type=leave_type, reason=reason, date_str=date_str
            )
            try:
                request = create_request(self.role, RequestType.LEAVE, params)
            except ValueError as exc:
                raise ValueError(
                    f"failed to create leave request using factory: {exc}"
                ) from exc
            self._save(request)
        return request

    def review(self, request_id: str, action: str, reason: str) -> LeaveRequest:
        """Approve or reject the leave request with the given id and return it."""
        return self._review(request_id, action, reason)

    def get(self, request_id: int) -> LeaveRequest:
        """Return the leave request with ``request_id``; raise ``LookupError`` if absent."""
        return self._get(request_id)

    def all(self) -> list[LeaveRequest]:
        """Return every leave request in id order."""
        return [self._from_row(row) for row in self._db.execute(self._select + " ORDER BY id")]

    def by_owner(self, code: str) -> list[LeaveRequest]:
        """Return the leave requests submitted by the student or instructor ``code``."""
        rows = self._db.execute(
            self._select + f" WHERE {self._table.owner_column} = ? ORDER BY id", (code,)
        )
        return [self._from_row(row) for row in rows]

    def export(self, path: Union[str, "os.PathLike[str]"]) -> int:
        """Write every request to a CSV or JSON file and return how many were written."""
        requests = self.all()
        extension = Path(path).suffix.lower()
        names = [f.name for f in fields(self._table.model)]
        records = [
            {key: _to_column(value) for key, value in asdict(request).items()}
            for request in requests
        ]
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
        logger.info("Exported %d leave requests to %s", len(requests), path)
        return len(requests)


class ResignationRequestStore(_RequestStore):
    """Resignation requests of students or of instructors, chosen by ``role``."""

    def __init__(self, db: sqlite3.Connection, role: Role) -> None:
        super().__init__(db, _RESIGNATION_TABLES[role])
        self.role = role

    def submit(self, code: str, reason: str) -> ResignationRequest:
        """Record a new pending resignation request and return it."""
        with self._transactions.transaction():
            params = CreateRequestParams(id=code, reason=reason)
            try:
                request = create_request(self.role, RequestType.RESIGNATION, params)
            except ValueError as exc:
                raise ValueError(
                    f"failed to create resignation request using factory: {exc}"
                ) from exc
            self._save(request)
        return request

    def review(self, request_id: str, action: str, reason: str) -> ResignationRequest:
        """Approve or reject the resignation request with the given id and return it."""
        return self._review(request_id, action, reason)

    def get(self, request_id: int) -> ResignationRequest:
        """Return the resignation request with ``request_id``; raise ``LookupError`` if absent."""
        return self._get(request_id)

    def all(self, limit: int = 0, offset: int = 0) -> list[ResignationRequest]:
        """Return requests newest first; positive ``limit`` and ``offset`` page the result."""
        query = self._select + " ORDER BY id DESC"
        args: list[int] = []
        if limit > 0 or offset > 0:
            query += " LIMIT ?"
            args.append(limit if limit > 0 else -1)
            if offset > 0:
                query += " OFFSET ?"
                args.append(offset)
        return [self._from_row(row) for row in self._db.execute(query, args)]