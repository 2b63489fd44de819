import asyncio
from typing import Any, Dict, Optional

import aiohttp
from constants.league_config import LEAGUE_CONFIG
from logger import setup_logger
from utils.riot_credentials import CredentialStore
from utils.riot_errors import (
    APIUnavailableError,
    ErrorKind,
    TransportError,
    UnauthenticatedError,
    error_for_status,
)

logger = setup_logger("RiotTransport")


class RiotTransport:
    """
    Performs single authenticated GET requests against the Riot API.
    Rate limiting is the scheduler's job; this class never retries.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = LEAGUE_CONFIG["api"]["request_timeout"],
    ):
        self.credentials = credentials
        self._session = session
        self.timeout = timeout
        self.header_name = LEAGUE_CONFIG["api"]["header"]

    def _build_headers(self, api_key: str, extra: Optional[Dict] = None) -> Dict:
        headers = {
            self.header_name: api_key,
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def execute(self, url: str, options: Optional[Dict] = None) -> Any:
        """
        Execute one GET request and return the parsed JSON body.

        Args:
            url: Fully built endpoint URL
            options: Optional dict with extra "headers" and "params"

        Returns:
            Parsed JSON body

        Raises:
            UnauthenticatedError: When no API key is set (no request is made)
            TransportError: Typed subclass for any non-2xx status
            APIUnavailableError: On network errors and timeouts
        """
        options = options or {}
        api_key = self.credentials.get()
        if not api_key:
            raise UnauthenticatedError("API key not set")

        headers = self._build_headers(api_key, options.get("headers"))
        params = options.get("params")

        try:
            if self._session is not None:
                return await self._request(self._session, url, headers, params)
            async with aiohttp.ClientSession() as session:
                return await self._request(session, url, headers, params)

        except TransportError:
            raise

        except aiohttp.ClientError as e:
            logger.error(f"❌ Network error fetching {url}: {e}")
            raise APIUnavailableError(f"Network error: {e}")

        except asyncio.TimeoutError:
            logger.error(f"❌ Timeout fetching {url}")
            raise APIUnavailableError("Request timed out")

    async def _request(
        self,
        session: aiohttp.ClientSession,
        url: str,
        headers: Dict,
        params: Optional[Dict],
    ) -> Any:
        async with session.get(
            url,
            headers=headers,
            params=params,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as response:
            if 200 <= response.status < 300:
                logger.debug(f"✅ {response.status} {url}")
                return await response.json()

            error = await self._build_error(response)

            if error.kind is ErrorKind.RATE_LIMITED:
                # Admission control should keep us under quota
                logger.error(
                    f"⚠️ Upstream rate limit hit on {url} - check the configured "
                    f"quota (retry after {error.retry_after}s)"
                )
            elif error.kind is ErrorKind.NOT_FOUND:
                logger.info(f"404 Not Found: {url}")
            else:
                logger.warning(f"❌ API Error {response.status}: {url} - {error}")

            raise error

    async def _build_error(self, response: aiohttp.ClientResponse) -> TransportError:
        """Map a non-2xx response to a typed error, preferring the server message."""
        message = None
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            body = None

        if isinstance(body, dict):
            status_block = body.get("status")
            message = body.get("message")
            if not message and isinstance(status_block, dict):
                message = status_block.get("message")

        retry_after = None
        if response.status == 429:
            try:
                retry_after = float(response.headers.get("Retry-After", "1"))
            except ValueError:
                retry_after = 1

        return error_for_status(response.status, message, retry_after)
