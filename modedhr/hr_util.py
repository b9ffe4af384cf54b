"""Small helpers: fallback selection, opening the database and running transactions."""

from __future__ import annotations

import itertools
import logging
import sqlite3
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from os import PathLike
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_savepoint_ids = itertools.count(1)


def if_not_empty(new_value: str, fallback: str) -> str:
    """Return ``new_value`` unless it is empty, else ``fallback``."""
    return new_value if new_value != "" else fallback


def if_not_zero(new_value: int, fallback: int) -> int:
    """Return ``new_value`` unless it is zero, else ``fallback``."""
    return new_value if new_value != 0 else fallback


def open_database(path: str | PathLike[str]) -> sqlite3.Connection:
    """Open the SQLite database at ``path``; transactions are managed explicitly."""
    connection = sqlite3.connect(path, isolation_level=None)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    return connection


@dataclass
class TransactionManager:
    """Runs work inside a transaction, nesting with savepoints when one is already open."""

    db: sqlite3.Connection
    _depth: int = field(default=0, init=False, repr=False)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Open a transaction, commit on success and roll back on any exception."""
        start = time.perf_counter()
        nested = self._depth > 0 or self.db.in_transaction
        savepoint = f"tm_sp_{next(_savepoint_ids)}"
        self.db.execute(f"SAVEPOINT {savepoint}" if nested else "BEGIN")
        self._depth += 1
        try:
            yield self.db
        except BaseException as exc:
            if nested:
                self.db.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
                self.db.execute(f"RELEASE SAVEPOINT {savepoint}")
            else:
                self.db.rollback()
            logger.warning(
                "Transaction rolled back after %.6fs. Error: %s",
                time.perf_counter() - start,
                exc,
            )
            raise
        else:
            if nested:
                self.db.execute(f"RELEASE SAVEPOINT {savepoint}")
            else:
                self.db.commit()
        finally:
            self._depth -= 1

    def execute(self, func: Callable[[sqlite3.Connection], T]) -> T:
        """Call ``func`` with the connection inside a transaction and return its result."""
        with self.transaction() as connection:
            return func(connection)