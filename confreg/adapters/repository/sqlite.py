"""
SQLite repository adapter - Implements RegistrationRepository protocol.

This module provides the SQLite implementation of the domain's repository
port using the standard library sqlite3 driver with raw SQL.

Concurrency Design - Single Connection, Exclusive Access:
--------------------------------------------------------
The repository owns exactly one long-lived connection for the whole process.
Request workers share it, so every statement runs inside a critical section
guarded by a threading.Lock:

1. **Serialized writes**: insert() holds the lock for the whole
   INSERT + COMMIT, so concurrent submissions never interleave partial rows.
   Their relative order is unspecified.

2. **Guard poisoning**: if a holder leaves the critical section through an
   exception the repository does not translate into PersistenceError, the
   connection may be left mid-transaction. The repository marks itself
   poisoned and re-raises.

3. **Recovery**: the next insert() observes the poison, rolls the
   connection back, clears the flag and raises LockError for that one
   request. Later requests are served normally.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from confreg.domain.exceptions import LockError, PersistenceError
from confreg.domain.registration import Registration

logger = logging.getLogger(__name__)

# Column order matches Registration field order
COLUMNS = (
    "last_name",
    "first_name",
    "email",
    "institution",
    "project",
    "country",
    "course",
    "price_category",
    "title",
    "presentation",
    "meal",
    "pay_cash",
    "conference_dinner",
    "more_info",
)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS registration (
        id                INTEGER PRIMARY KEY AUTOINCREMENT,
        last_name         TEXT NOT NULL,
        first_name        TEXT NOT NULL,
        email             TEXT NOT NULL,
        institution       TEXT NOT NULL,
        project           TEXT,
        country           TEXT,
        course            TEXT,
        price_category    TEXT NOT NULL,
        title             TEXT NOT NULL,
        presentation      TEXT NOT NULL,
        meal              TEXT NOT NULL,
        pay_cash          TEXT NOT NULL CHECK (pay_cash IN ('0', '1')),
        conference_dinner TEXT NOT NULL CHECK (conference_dinner IN ('0', '1')),
        more_info         TEXT NOT NULL
    )
"""

INSERT_SQL = "INSERT INTO registration ({}) VALUES ({})".format(
    ", ".join(COLUMNS), ", ".join(f":{column}" for column in COLUMNS)
)


class SqliteRegistrationRepository:
    """
    Implements RegistrationRepository protocol via sqlite3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, database: str | Path) -> None:
        """
        Open the process-wide connection.

        Args:
            database: Path of the SQLite database file (":memory:" for tests)

        Raises:
            PersistenceError: If the database cannot be opened
        """
        self._database = str(database)
        self._lock = threading.Lock()
        self._poisoned = False
        try:
            self._conn = sqlite3.connect(self._database, check_same_thread=False)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open database {self._database}: {e}") from e

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def ensure_schema(self) -> None:
        """
        Create the registration table if absent.

        Uses CREATE TABLE IF NOT EXISTS, so repeated calls neither fail nor
        touch existing rows.
        """
        with self._exclusive():
            try:
                self._conn.execute(SCHEMA_SQL)
                self._conn.commit()
            except sqlite3.Error as e:
                self._rollback()
                raise PersistenceError(f"Cannot create registration table: {e}") from e
        logger.info("Registration table ready in %s", self._database)

    def insert(self, registration: Registration) -> int:
        """
        Append one registration row.

        Args:
            registration: Validated registration

        Returns:
            Auto-assigned row id

        Raises:
            PersistenceError: On constraint violation, I/O failure or any
                other sqlite3 error
            LockError: If a previous holder left the guard poisoned
        """
        with self._exclusive():
            try:
                cursor = self._conn.execute(INSERT_SQL, registration.to_row())
                self._conn.commit()
            except sqlite3.Error as e:
                self._rollback()
                raise PersistenceError(f"Cannot insert registration: {e}") from e
            return cursor.lastrowid

    def count(self) -> int:
        """Number of stored registrations."""
        with self._exclusive():
            try:
                return self._conn.execute("SELECT COUNT(*) FROM registration").fetchone()[0]
            except sqlite3.Error as e:
                raise PersistenceError(f"Cannot count registrations: {e}") from e

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info("Database connection to %s closed", self._database)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        """
        Critical section over the connection.

        The lock is released on every exit path. Leaving through anything but
        a PersistenceError poisons the repository.
        """
        with self._lock:
            if self._poisoned:
                self._recover()
                raise LockError("Registration store guard was poisoned by a previous failure")
            try:
                yield
            except PersistenceError:
                raise
            except BaseException as e:
                self._poisoned = True
                logger.error("Registration store guard poisoned by %s: %s", type(e).__name__, e)
                raise

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlite3.Error:
            logger.exception("Rollback failed on %s", self._database)

    def _recover(self) -> None:
        self._rollback()
        self._poisoned = False
        logger.warning("Registration store guard was poisoned; connection rolled back")
