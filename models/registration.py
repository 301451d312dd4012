"""
models/registration.py
----------------------
Outcomes of the duplicate check and of the registration insert.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NoMatch:
    """Neither the channel nor the ladder id is registered."""
    found = False
    channel = False
    ladder_id = False


@dataclass(frozen=True)
class ChannelConflict:
    """The channel is already registered."""
    found = True
    channel = True
    ladder_id = False


@dataclass(frozen=True)
class LadderIdConflict:
    """The ladder id is already registered under a different channel."""
    found = True
    channel = False
    ladder_id = True


DuplicateCheck = Union[NoMatch, ChannelConflict, LadderIdConflict]


@dataclass(frozen=True)
class RegistrationConflict:
    """Insert rejected by a unique constraint; ``code`` is the SQLSTATE."""
    code: str
