from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        logger.warning("Rollback failed: %s", exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits when the block exits cleanly, rolls back on any error. Driver
    errors surface as StoreUnavailable.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        logger.error("Attendance store error, transaction rolled back: %s", exc)
        raise StoreUnavailable("Attendance store is unavailable, please retry") from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
