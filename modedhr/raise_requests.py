"""Storage and review of instructors' salary raise requests."""

from __future__ import annotations

import csv
import json
import logging
import os
import sqlite3
from dataclasses import asdict, fields
from pathlib import Path
from typing import Union

from modedhr.hr_requests import (
    CreateRequestParams,
    RequestRaiseInstructor,
    RequestType,
    Role,
    create_request,
)
from modedhr.hr_review import review_request
from modedhr.hr_util import TransactionManager

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS request_raise_instructors (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    reason TEXT,
    status TEXT DEFAULT 'Pending',
    instructor_code TEXT NOT NULL,
    target_salary REAL NOT NULL
)
"""

_SELECT = (
    "SELECT id, reason, status, instructor_code, target_salary "
    "FROM request_raise_instructors"
)

_FIELD_NAMES = [f.name for f in fields(RequestRaiseInstructor)]


def _from_row(row) -> RequestRaiseInstructor:
    ident, reason, status, instructor_code, target_salary = tuple(row)
    return RequestRaiseInstructor(
        id=ident,
        reason=reason or "",
        status=status or "",
        instructor_code=instructor_code,
        target_salary=float(target_salary),
    )


class RaiseRequestStore:
    """Raise requests kept in an SQLite database."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db
        self._transactions = TransactionManager(db)
        db.execute(_SCHEMA)

    def _save(self, request: RequestRaiseInstructor) -> None:
        with self._transactions.transaction() as connection:
            values = (
                request.reason,
                request.status,
                request.instructor_code,
                request.target_salary,
            )
            if request.id is None:
                cursor = connection.execute(
                    "INSERT INTO request_raise_instructors "
                    "(reason, status, instructor_code, target_salary) VALUES (?, ?, ?, ?)",
                    values,
                )
                request.id = cursor.lastrowid
            else:
                connection.execute(
                    "INSERT OR REPLACE INTO request_raise_instructors "
                    "(id, reason, status, instructor_code, target_salary) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (request.id, *values),
                )

    def submit(self, instructor_code: str, amount: float, reason: str) -> RequestRaiseInstructor:
        """Record a new pending raise request and return it with its id."""
        with self._transactions.transaction():
            params = CreateRequestParams(
                id=instructor_code, reason=reason, target_salary=amount
            )
            try:
                request = create_request(Role.INSTRUCTOR, RequestType.RAISE, params)
            except ValueError as exc:
                raise ValueError(f"failed to create raise request: {exc}") from exc
            self._save(request)
        return request

    def review(self, request_id: str, action: str, reason: str) -> RequestRaiseInstructor:
        """Approve or reject the request with the given id."""
        return review_request(request_id, action, reason, self.get, self._save)

    def get(self, request_id: int) -> RequestRaiseInstructor:
        """Return the request with ``request_id``; raise ``LookupError`` if absent."""
        row = self._db.execute(_SELECT + " WHERE id = ?", (request_id,)).fetchone()
        if row is None:
            raise LookupError(f"raise request {request_id} not found")
        return _from_row(row)

    def all(self) -> list[RequestRaiseInstructor]:
        """Return every raise request in id order."""
        return [_from_row(row) for row in self._db.execute(_SELECT + " ORDER BY id")]

    def by_instructor(self, instructor_code: str) -> list[RequestRaiseInstructor]:
        """Return the raise requests of one instructor."""
        rows = self._db.execute(
            _SELECT + " WHERE instructor_code = ? ORDER BY id", (instructor_code,)
        )
        return [_from_row(row) for row in rows]

    def export(self, path: Union[str, "os.PathLike[str]"]) -> int:
        """Write every request to a CSV or JSON file and return how many were written."""
        requests = self.all()
        extension = Path(path).suffix.lower()
        records = [asdict(request) for request in requests]
        if extension == ".csv":
            with open(path, "w", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=_FIELD_NAMES)
                writer.writeheader()
                writer.writerows(records)
        elif extension == ".json":
            with open(path, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2)
        else:
            raise ValueError(f"unsupported file format: {extension}")
        logger.info("Exported %d instructor raise requests to %s", len(requests), path)
        return len(requests)