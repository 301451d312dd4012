"""
repositories/channel_repo.py
-----------------------------
Data access layer for channel registrations.
"""

from typing import Union

from psycopg2 import errorcodes, errors

from db.executor import QueryExecutor, QueryResult
from models.registration import (
    ChannelConflict,
    DuplicateCheck,
    LadderIdConflict,
    NoMatch,
    RegistrationConflict,
)
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "registered_channels"
COL_ID = "id"
COL_CHANNEL = "channel"
COL_LADDER_ID = "ladder_id"


class RegisteredChannelRepository:
    """Repository for the registered_channels table."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def load_registered_users(self) -> list[str]:
        """
        List every registered channel name.

        Returns:
            Channel names in row order (empty list when nothing is registered).
        """
        result = await self._executor.select(TABLE, [COL_ID, COL_CHANNEL])
        return [row[COL_CHANNEL] for row in result.rows]

    async def check_user_or_id_repeated(self, channel: str, ladder_id: int) -> DuplicateCheck:
        """
        Check whether a channel or a ladder id is already registered.

        The channel is looked up first and wins: a row matching both
        reports ChannelConflict. The ladder id is only queried when the
        channel is free.

        Returns:
            NoMatch, ChannelConflict or LadderIdConflict.
        """
        fields = [COL_CHANNEL, COL_LADDER_ID]
        by_channel = await self._executor.select(TABLE, fields, [COL_CHANNEL], [channel])
        if by_channel.rows:
            return ChannelConflict()

        by_id = await self._executor.select(TABLE, fields, [COL_LADDER_ID], [ladder_id])
        if by_id.rows:
            return LadderIdConflict()
        return NoMatch()

    async def insert_new_channel_ladder_id(
        self, username: str, ladder_id: int
    ) -> Union[QueryResult, RegistrationConflict]:
        """
        Register a channel against a ladder id.

        Returns:
            The insert's QueryResult, or RegistrationConflict carrying the
            unique-violation SQLSTATE when the channel or id is taken.

        Raises:
            psycopg2.Error: For any other database failure.
        """
        try:
            result = await self._executor.insert(
                TABLE, [COL_CHANNEL, COL_LADDER_ID], [username, ladder_id]
            )
        except errors.UniqueViolation:
            logger.info(f"Registration of '{username}' / {ladder_id} rejected: already registered")
            return RegistrationConflict(code=errorcodes.UNIQUE_VIOLATION)
        logger.info(f"Registered channel '{username}' with ladder id {ladder_id}")
        return result

    async def delete_registered_user(self, username: str) -> QueryResult:
        """
        Remove a channel's registration.

        Deleting a channel that is not registered succeeds with rowcount 0.
        """
        result = await self._executor.delete(TABLE, [COL_CHANNEL], [username])
        logger.info(f"Deleted registration for '{username}' ({result.rowcount} row(s))")
        return result
