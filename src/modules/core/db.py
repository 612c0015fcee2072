"""Database helpers for bounded lock waits.

Row locks are taken with ``select_for_update()`` inside
``locking_transaction()``, which bounds how long the transaction waits for
a lock.  ``is_lock_timeout`` recognises the error each backend raises when
that wait expires.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import structlog
from django.db import DatabaseError, connections, transaction

logger = structlog.get_logger(__name__)

# PostgreSQL SQLSTATE lock_not_available
_PG_LOCK_NOT_AVAILABLE = "55P03"
# MySQL ER_LOCK_WAIT_TIMEOUT / ER_LOCK_NOWAIT
_MYSQL_LOCK_ERRORS = frozenset({1205, 3572})
_SQLITE_LOCK_MESSAGES = ("database is locked", "database table is locked")


def _milliseconds(seconds: float) -> int:
    return max(int(seconds * 1000), 1)


def _read_session_bound(connection) -> Optional[int]:
    """Current session-level lock wait, in the vendor's own unit."""
    if connection.vendor == "sqlite":
        query = "PRAGMA busy_timeout"
    elif connection.vendor == "mysql":
        query = "SELECT @@SESSION.innodb_lock_wait_timeout"
    else:
        return None
    with connection.cursor() as cursor:
        cursor.execute(query)
        return int(cursor.fetchone()[0])


def _write_session_bound(connection, value: int) -> None:
    with connection.cursor() as cursor:
        if connection.vendor == "sqlite":
            # PRAGMA takes no bound parameters
            cursor.execute(f"PRAGMA busy_timeout = {int(value)}")
        else:
            cursor.execute("SET SESSION innodb_lock_wait_timeout = %s", [value])


def _session_value(vendor: str, seconds: float) -> int:
    if vendor == "sqlite":
        return _milliseconds(seconds)
    return max(int(round(seconds)), 1)


@contextmanager
def locking_transaction(seconds: float, using: str = "default") -> Iterator[None]:
    """``transaction.atomic()`` whose lock waits are bounded to *seconds*.

    PostgreSQL scopes the bound to the transaction with ``set_config``.
    MySQL (``innodb_lock_wait_timeout``) and SQLite (``busy_timeout``) keep
    it on the session, so the previous value is restored on exit.  SQLite
    takes its write lock at ``BEGIN IMMEDIATE``, hence the bound is set
    before the transaction opens.
    """
    connection = connections[using]
    connection.ensure_connection()
    vendor = connection.vendor

    previous = _read_session_bound(connection)
    if previous is not None:
        _write_session_bound(connection, _session_value(vendor, seconds))
    elif vendor != "postgresql":
        logger.debug("db.lock_wait_unbounded", vendor=vendor)

    try:
        with transaction.atomic(using=using):
            if vendor == "postgresql":
                with connection.cursor() as cursor:
                    cursor.execute(
                        "SELECT set_config('lock_timeout', %s, true)",
                        [f"{_milliseconds(seconds)}ms"],
                    )
            yield
    finally:
        if previous is not None:
            _restore_session_bound(connection, previous)


def _restore_session_bound(connection, previous: int) -> None:
    try:
        _write_session_bound(connection, previous)
    except DatabaseError as exc:
        # Closing drops the session setting with the session.
        logger.warning(
            "db.lock_wait_restore_failed", vendor=connection.vendor, error=str(exc)
        )
        connection.close()


def is_lock_timeout(exc: DatabaseError) -> bool:
    """Return ``True`` if *exc* reports an expired lock wait."""
    cause = exc.__cause__ or exc
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate == _PG_LOCK_NOT_AVAILABLE:
        return True

    args = getattr(cause, "args", ())
    if args and args[0] in _MYSQL_LOCK_ERRORS:
        return True

    message = str(exc).lower()
    return any(text in message for text in _SQLITE_LOCK_MESSAGES)
