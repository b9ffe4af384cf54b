"""Departments kept in an SQLite table with a flexible set of columns."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from typing import Any

from modedhr.hr_util import TransactionManager

_SCHEMA = """
CREATE TABLE IF NOT EXISTS departments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT
)
"""


class DepartmentNotFoundError(LookupError):
    """Raised when no department has the requested name."""

    def __init__(self) -> None:
        super().__init__("department not found")


def _quote(column: str) -> str:
    return '"' + column.replace('"', '""') + '"'


def _decode_name(name: str) -> str:
    return name.replace("%20", " ")


class DepartmentStore:
    """Rows of the ``departments`` table handled as plain dictionaries."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db
        self._transactions = TransactionManager(db)
        db.execute(_SCHEMA)

    def _columns(self) -> list[str]:
        return [row[1] for row in self._db.execute("PRAGMA table_info(departments)")]

    def _checked(self, values: Mapping[str, Any]) -> list[str]:
        known = set(self._columns())
        unknown = [column for column in values if column not in known]
        if unknown:
            raise ValueError(f"unknown department columns: {', '.join(sorted(unknown))}")
        return list(values)

    def _rows(self, query: str, args: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
        cursor = self._db.execute(query, args)
        names = [description[0] for description in cursor.description]
        return [dict(zip(names, tuple(row))) for row in cursor]

    def list(self, limit: int = 0, offset: int = 0) -> list[dict[str, Any]]:
        """Return departments; positive ``limit`` and ``offset`` page the result."""
        query = "SELECT * FROM departments"
        args: list[int] = []
        if limit > 0 or offset > 0:
            query += " LIMIT ?"
            args.append(limit if limit > 0 else -1)
            if offset > 0:
                query += " OFFSET ?"
                args.append(offset)
        return self._rows(query, tuple(args))

    def get_by_name(self, name: str) -> dict[str, Any]:
        """Return the department called ``name`` (``%20`` reads as a space)."""
        rows = self._rows(
            "SELECT * FROM departments WHERE name = ? LIMIT 1", (_decode_name(name),)
        )
        if not rows:
            raise DepartmentNotFoundError()
        return rows[0]

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a department from column values; any ``id`` given is ignored."""
        values = {key: value for key, value in payload.items() if key != "id"}
        columns = self._checked(values)
        with self._transactions.transaction() as connection:
            if columns:
                connection.execute(
                    f"INSERT INTO departments ({', '.join(_quote(c) for c in columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    tuple(values[column] for column in columns),
                )
            else:
                connection.execute("INSERT INTO departments DEFAULT VALUES")
        return values

    def update_by_name(self, name: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Apply ``patch`` to the first department called ``name``."""
        target = _decode_name(name.strip())
        row = self._db.execute(
            "SELECT id FROM departments WHERE name = ? ORDER BY id LIMIT 1", (target,)
        ).fetchone()
        if row is None:
            raise DepartmentNotFoundError()
        ident = row[0]
        columns = self._checked(patch)
        if columns:
            clause = ", ".join(f"{_quote(column)} = ?" for column in columns)
            with self._transactions.transaction() as connection:
                connection.execute(
                    f"UPDATE departments SET {clause} WHERE id = ?",
                    (*(patch[column] for column in columns), ident),
                )
        return {"updated": True, "id": ident}

    def delete_by_name(self, name: str) -> None:
        """Delete every department called exactly ``name``."""
        with self._transactions.transaction() as connection:
            cursor = connection.execute("DELETE FROM departments WHERE name = ?", (name,))
            removed = cursor.rowcount
        if removed == 0:
            raise DepartmentNotFoundError()