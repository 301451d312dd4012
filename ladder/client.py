"""
ladder/client.py
----------------
Thin async wrapper around GET requests to the Ladder public API.

Outcomes:
    - 200             -> LadderSuccess (returned)
    - any other code  -> LadderRemoteError (returned)
    - no response     -> LadderTransportError (raised)
"""

from typing import Any, Optional

import httpx

from config import LADDER_TIMEOUT, LADDER_URL
from models.ladder import LadderRemoteError, LadderResult, LadderSuccess, LadderTransportError
from utils.logger import get_logger

logger = get_logger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    """Decode JSON responses; anything else, or JSON that fails to parse, is returned as text."""
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.warning("Ladder response declared JSON but could not be parsed; returning text")
    return response.text


class LadderClient:
    """
    Client for the Ladder API.

    Args:
        base_url: Prefix every path is appended to (no escaping is applied).
        http_client: Optional shared httpx.AsyncClient. When omitted, each
            request opens and closes its own client.
    """

    def __init__(
        self,
        base_url: str = LADDER_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = LADDER_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self._http_client = http_client
        self._timeout = timeout

    async def _get(self, url: str) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url)

    async def make_ladder_request(self, path: str) -> LadderResult:
        """
        GET ``base_url + path``.

        Args:
            path: Path under the API root, e.g. ``"players/123"``.

        Returns:
            LadderSuccess for HTTP 200, LadderRemoteError otherwise.

        Raises:
            LadderTransportError: If no response was received.
        """
        url = f"{self.base_url}{path}"
        logger.info(f"Ladder request - {url}")
        try:
            response = await self._get(url)
        except httpx.RequestError as e:
            logger.error(f"Ladder request to {url} failed: {e!r}")
            raise LadderTransportError(e) from e

        if response.status_code == 200:
            return LadderSuccess(body=_decode_body(response))

        result = LadderRemoteError(status_code=response.status_code, path=path)
        logger.warning(result.error_message)
        return result


_default_client = LadderClient()


async def make_ladder_request(path: str) -> LadderResult:
    """Module-level shortcut using a client configured from config.py."""
    return await _default_client.make_ladder_request(path)
