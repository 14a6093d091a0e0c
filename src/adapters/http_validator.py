"""HTTP reachability validator backed by aiohttp.

A link counts as reachable as soon as the server answers, whatever the status
code. Only transport failures (DNS, refused connections, timeouts, malformed
URLs) drop a link.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

import aiohttp
from yarl import URL

LOGGER = logging.getLogger(__name__)

_HTTP_SCHEMES = frozenset({"http", "https"})


def _is_requestable(url: str) -> bool:
    """True for absolute http(s) URLs with a host; aiohttp asserts on some others."""

    try:
        parsed = URL(url)
    except (TypeError, ValueError):
        return False
    return parsed.is_absolute() and parsed.scheme in _HTTP_SCHEMES and bool(parsed.host)


class HttpLinkValidator:
    """Validator adapter issuing one GET per candidate URL."""

    def __init__(self, timeout_seconds: float, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        # The session must be created inside the running loop, so it is built
        # lazily on the first validation and then shared by every message.
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def _is_reachable(self, session: aiohttp.ClientSession, url: str) -> bool:
        if not _is_requestable(url):
            LOGGER.warning("Error getting url %s: not an absolute http(s) URL", url)
            return False
        try:
            async with session.get(url) as response:
                LOGGER.debug("Valid url %s (HTTP %s)", url, response.status)
                return True
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            LOGGER.warning("Error getting url %s: %r", url, exc)
            return False
        except Exception:
            # aiohttp internals can still assert on odd input; one bad link must
            # not cost the rest of the message.
            LOGGER.warning("Unexpected error getting url %s", url, exc_info=True)
            return False

    async def validate(self, urls: Sequence[str]) -> List[str]:
        """Return the reachable URLs, keeping their relative order."""

        if not urls:
            return []

        session = await self._get_session()
        valid_urls: List[str] = []
        for url in urls:
            if await self._is_reachable(session, url):
                valid_urls.append(url)
        return valid_urls

    async def close(self) -> None:
        """Close the shared session on shutdown."""

        if self._session is not None and not self._session.closed:
            await self._session.close()
