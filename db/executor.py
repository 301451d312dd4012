"""
db/executor.py
--------------
Generic single-statement SQL execution over the connection pool.

Every operation borrows one connection, runs exactly one parameterized
statement on a worker thread, commits, and hands the connection back.
Values are always bound positionally; table and column names are
interpolated, so they are restricted to plain identifiers.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from psycopg2 import extras

from db.connection import ConnectionPool, run_blocking
from utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DeletePreconditionError(Exception):
    """Raised when a delete is attempted without a where clause or values."""


@dataclass
class QueryResult:
    """Rows returned by a statement (empty for INSERT/DELETE) and the affected row count."""
    rows: list[dict] = field(default_factory=list)
    rowcount: int = 0


def _identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _column_list(fields: Sequence[str]) -> str:
    return ", ".join(_identifier(f) for f in fields)


def _where_clause(fields: Sequence[str]) -> str:
    return " AND ".join(f"{_identifier(f)} = %s" for f in fields)


def _run_statement(conn, sql: str, params: Optional[Sequence[Any]]) -> QueryResult:
    """Execute one statement on a borrowed connection (blocking)."""
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(sql, params)
            rows = [dict(r) for r in cur.fetchall()] if cur.description else []
            rowcount = cur.rowcount
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    return QueryResult(rows=rows, rowcount=rowcount)


class QueryExecutor:
    """Runs select/insert/delete statements, one pooled connection per call."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    async def _execute(self, sql: str, params: Optional[Sequence[Any]]) -> QueryResult:
        async with self._pool.connection() as conn:
            try:
                return await run_blocking(_run_statement, conn, sql, params)
            except Exception:
                logger.exception(f"Statement failed: {sql}")
                raise

    async def select(
        self,
        table: str,
        fields: Sequence[str],
        where: Optional[Sequence[str]] = None,
        where_values: Optional[Sequence[Any]] = None,
    ) -> QueryResult:
        """
        Run ``SELECT <fields> FROM <table> [WHERE <col> = %s AND ...]``.

        Args:
            table: Table name.
            fields: Column names to return.
            where: Column names compared for equality, joined with AND.
            where_values: Values bound to the where columns, in order.

        Returns:
            QueryResult with one dict per row, in database order.
        """
        sql = f"SELECT {_column_list(fields)} FROM {_identifier(table)}"
        if where:
            sql += f" WHERE {_where_clause(where)}"
        return await self._execute(sql + ";", list(where_values) if where_values else None)

    async def insert(
        self, table: str, fields: Sequence[str], insert_values: Sequence[Any]
    ) -> QueryResult:
        """
        Run ``INSERT INTO <table> (<fields>) VALUES (%s, ...)``.

        Uniqueness violations are raised like any other statement error.
        """
        placeholders = ", ".join("%s" for _ in insert_values)
        sql = f"INSERT INTO {_identifier(table)} ({_column_list(fields)}) VALUES ({placeholders});"
        return await self._execute(sql, list(insert_values))

    async def delete(
        self, table: str, fields: Sequence[str], delete_values: Sequence[Any]
    ) -> QueryResult:
        """
        Run ``DELETE FROM <table> WHERE <col> = %s AND ...``.

        Raises:
            DeletePreconditionError: If ``fields`` or ``delete_values`` is
                empty. Raised before any connection is borrowed.
        """
        if (
            not fields
            or any(not isinstance(f, str) or not f.strip() for f in fields)
            or not delete_values
        ):
            raise DeletePreconditionError()
        sql = f"DELETE FROM {_identifier(table)} WHERE {_where_clause(fields)};"
        return await self._execute(sql, list(delete_values))
