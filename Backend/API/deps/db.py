import logging
import pyodbc
from contextlib import contextmanager

from deps import settings

logger = logging.getLogger(__name__)


@contextmanager
def get_conn(dsn: str | None = None):
    """One transaction per block: commit on exit, rollback on any error."""
    dsn = dsn or settings.DB_DSN
    if not dsn:
        raise RuntimeError("DB_DSN is not configured")
    conn = pyodbc.connect(dsn, autocommit=False)
    try:
        yield conn
        conn.commit()
    except pyodbc.Error:
        logger.exception("Database error, rolling back")
        conn.rollback()
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def exec_tsql(conn, sql: str, params: tuple = ()) -> list:
    cur = conn.cursor()
    cur.execute(sql, params)
    try:
        rows = cur.fetchall()
    except pyodbc.ProgrammingError:
        # statement produced no result set
        rows = []
    return rows


def fetch_one(conn, sql: str, params: tuple = ()) -> dict | None:
    cur = conn.cursor()
    cur.execute(sql, params)
    row = cur.fetchone()
    if row is None:
        return None
    columns = [c[0] for c in cur.description]
    return dict(zip(columns, row))
