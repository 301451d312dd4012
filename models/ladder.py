"""
models/ladder.py
----------------
Outcomes of a Ladder API lookup.

A call either returns LadderSuccess / LadderRemoteError, or raises
LadderTransportError when no response was received at all.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class LadderSuccess:
    """HTTP 200; ``body`` is the decoded response."""
    body: Any
    success = True
    error_message = None


@dataclass(frozen=True)
class LadderRemoteError:
    """The API answered with a status other than 200."""
    status_code: int
    path: str
    success = False
    body = None

    @property
    def error_message(self) -> str:
        return f"Something went wrong. Status code: {self.status_code} . Path: {self.path}"


LadderResult = Union[LadderSuccess, LadderRemoteError]


class LadderTransportError(Exception):
    """Raised when the Ladder API could not be reached."""

    success = False
    body = None

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error_message = error
