"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool, since connections are borrowed and
used from asyncio worker threads.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DATABASE_USER, DB_MAX_CONN, DB_MIN_CONN, DB_SSLMODE
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    Handle around a psycopg2-style pool.

    Any object exposing ``getconn()``, ``putconn(conn)`` and ``closeall()``
    can be wrapped, which is how tests substitute an in-memory pool.
    """

    def __init__(self, raw_pool, max_conn: int) -> None:
        self._pool = raw_pool
        # Callers queue here instead of hitting "connection pool exhausted".
        self._slots = asyncio.Semaphore(max_conn)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator:
        """
        Borrow one connection for the duration of the ``async with`` block.

        Waits while all ``max_conn`` connections are borrowed. The
        connection goes back to the pool on every exit path.
        """
        async with self._slots:
            conn = await self._checkout()
            try:
                yield conn
            finally:
                self._pool.putconn(conn)

    async def _checkout(self):
        checkout = asyncio.ensure_future(asyncio.to_thread(self._pool.getconn))
        try:
            return await asyncio.shield(checkout)
        except asyncio.CancelledError:
            # Borrower gave up mid-checkout: return the connection before
            # freeing its slot.
            await asyncio.wait([checkout])
            if checkout.exception() is None:
                self._pool.putconn(checkout.result())
            raise

    def close(self) -> None:
        """Close all connections in the pool."""
        self._pool.closeall()
        logger.info("Database connection pool closed.")


def init_pool(min_conn: int = DB_MIN_CONN, max_conn: int = DB_MAX_CONN) -> ConnectionPool:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        The ConnectionPool to hand to a QueryExecutor.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    connect_kwargs = {"sslmode": DB_SSLMODE}
    if DATABASE_USER:
        connect_kwargs["user"] = DATABASE_USER
    try:
        raw_pool = pool.ThreadedConnectionPool(min_conn, max_conn, DATABASE_URL, **connect_kwargs)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise
    logger.info("Database connection pool initialized successfully.")
    return ConnectionPool(raw_pool, max_conn)


async def run_blocking(func, *args):
    """
    Run a blocking call on a worker thread.

    If the awaiting task is cancelled, the call is still allowed to finish
    before the cancellation propagates, so a borrowed connection is never
    returned to the pool while a thread is using it.
    """
    work = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(work)
    except asyncio.CancelledError:
        await asyncio.wait([work])
        raise
