"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import asyncio

from db.connection import ConnectionPool, run_blocking
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Registered channels: one row per channel linked to a ladder player id
CREATE TABLE IF NOT EXISTS registered_channels (
    id              SERIAL PRIMARY KEY,
    channel         TEXT NOT NULL UNIQUE,
    ladder_id       INTEGER NOT NULL UNIQUE
);
"""


def _apply_schema(conn) -> None:
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
    except Exception:
        conn.rollback()
        raise


async def create_tables(pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    async with pool.connection() as conn:
        try:
            await run_blocking(_apply_schema, conn)
        except Exception as e:
            logger.error(f"Failed to initialize schema: {e}")
            raise
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from db.connection import init_pool

    _pool = init_pool()
    try:
        asyncio.run(create_tables(_pool))
    finally:
        _pool.close()
    print("Database schema created successfully.")
