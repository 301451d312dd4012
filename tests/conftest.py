"""
Pytest fixtures: an in-memory stand-in for psycopg2's pool, connections
and cursors, backed by a tiny table store that understands the statements
the executor emits and enforces unique columns.
"""

import re
import time

import pytest
from psycopg2 import errors, pool

from db.connection import ConnectionPool
from db.executor import QueryExecutor
from repositories.channel_repo import RegisteredChannelRepository

_SELECT = re.compile(r"^SELECT (?P<cols>.+?) FROM (?P<table>\w+)(?: WHERE (?P<where>.+))?;$")
_INSERT = re.compile(r"^INSERT INTO (?P<table>\w+) \((?P<cols>.+)\) VALUES \((?P<values>.+)\);$")
_DELETE = re.compile(r"^DELETE FROM (?P<table>\w+) WHERE (?P<where>.+);$")


def _where_columns(where: str) -> list[str]:
    return [part.split(" = ")[0].strip() for part in where.split(" AND ")]


class InMemoryDatabase:
    """Holds rows per table and fakes SELECT / INSERT / DELETE."""

    def __init__(self):
        self.tables = {"registered_channels": []}
        self.unique = {"registered_channels": ("channel", "ladder_id")}
        self.executed = []
        self._next_id = 1
        self._pending_error = None

    def fail_next(self, exc: Exception) -> None:
        self._pending_error = exc

    def seed(self, channel: str, ladder_id: int) -> None:
        self.tables["registered_channels"].append(
            {"id": self._next_id, "channel": channel, "ladder_id": ladder_id}
        )
        self._next_id += 1

    def run(self, sql, params):
        """Return (rows or None, rowcount)."""
        self.executed.append((sql, params))
        if self._pending_error is not None:
            exc, self._pending_error = self._pending_error, None
            raise exc

        m = _SELECT.match(sql)
        if m:
            cols = [c.strip() for c in m["cols"].split(",")]
            rows = self.tables[m["table"]]
            if m["where"]:
                where = dict(zip(_where_columns(m["where"]), params))
                rows = [r for r in rows if all(r[k] == v for k, v in where.items())]
            selected = [{c: r[c] for c in cols} for r in rows]
            return selected, len(selected)

        m = _INSERT.match(sql)
        if m:
            table = m["table"]
            row = dict(zip([c.strip() for c in m["cols"].split(",")], params))
            for col in self.unique.get(table, ()):
                if any(r[col] == row[col] for r in self.tables[table]):
                    raise errors.UniqueViolation(
                        f'duplicate key value violates unique constraint "{table}_{col}_key"'
                    )
            row["id"] = self._next_id
            self._next_id += 1
            self.tables[table].append(row)
            return None, 1

        m = _DELETE.match(sql)
        if m:
            table = m["table"]
            where = dict(zip(_where_columns(m["where"]), params))
            keep = [r for r in self.tables[table] if not all(r[k] == v for k, v in where.items())]
            removed = len(self.tables[table]) - len(keep)
            self.tables[table] = keep
            return None, removed

        # DDL and anything else: accepted, no result set.
        return None, -1


class FakeCursor:
    def __init__(self, database: InMemoryDatabase):
        self._database = database
        self._rows = []
        self.description = None
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def execute(self, sql, params=None):
        rows, self.rowcount = self._database.run(sql, params)
        self._rows = rows or []
        self.description = [("column",)] if rows is not None else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, database: InMemoryDatabase):
        self._database = database
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        return FakeCursor(self._database)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakeRawPool:
    """Mimics psycopg2's pool API and tracks how many connections are idle."""

    def __init__(self, database: InMemoryDatabase, size: int = 2):
        self.size = size
        self.connections = [FakeConnection(database) for _ in range(size)]
        self._idle = list(self.connections)
        self.getconn_calls = 0
        self.putconn_calls = 0
        self.most_borrowed = 0
        self.checkout_delay = 0.0
        self.closed = False

    @property
    def available(self) -> int:
        return len(self._idle)

    def getconn(self):
        time.sleep(self.checkout_delay)
        if not self._idle:
            raise pool.PoolError("connection pool exhausted")
        self.getconn_calls += 1
        conn = self._idle.pop()
        self.most_borrowed = max(self.most_borrowed, self.size - len(self._idle))
        return conn

    def putconn(self, conn):
        assert conn not in self._idle, "connection released twice"
        self.putconn_calls += 1
        self._idle.append(conn)

    def closeall(self):
        self.closed = True


@pytest.fixture
def database():
    return InMemoryDatabase()


@pytest.fixture
def raw_pool(database):
    return FakeRawPool(database)


@pytest.fixture
def connection_pool(raw_pool):
    return ConnectionPool(raw_pool, max_conn=raw_pool.size)


@pytest.fixture
def executor(connection_pool):
    return QueryExecutor(connection_pool)


@pytest.fixture
def repo(executor):
    return RegisteredChannelRepository(executor)
