"""HTTP utilities for Open API calls with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

import httpx

from feishu2md.config import (
    FEISHU2MD_FETCH_BACKOFF_S,
    FEISHU2MD_FETCH_MAX_RETRIES,
    FEISHU2MD_FETCH_TIMEOUT_S,
    FEISHU2MD_USER_AGENT,
)
from feishu2md.exceptions import DocumentNotFoundError, FetchError, RateLimitError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def create_client() -> httpx.AsyncClient:
    """Create the pooled client shared by every request of one conversion."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(FEISHU2MD_FETCH_TIMEOUT_S),
        headers={"User-Agent": FEISHU2MD_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def request_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    on_404_message: str | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, retrying transient failures with exponential backoff.

    Args:
        client: Pooled client to send the request with.
        method: HTTP method.
        url: Absolute URL.
        on_404_message: Message for the DocumentNotFoundError raised on 404.
        **kwargs: Passed through to ``httpx.AsyncClient.request``.

    Returns:
        The successful response.

    Raises:
        DocumentNotFoundError: On a 404 response (not retried).
        RateLimitError: If the last attempt was answered with 429.
        FetchError: On any other 4xx response, or if the request still fails
            after all retries.
    """
    last_exc: Exception | None = None
    last_status: int | None = None

    for attempt in range(FEISHU2MD_FETCH_MAX_RETRIES + 1):
        try:
            response = await client.request(method, url, **kwargs)

            if response.status_code == 404:
                raise DocumentNotFoundError(on_404_message or f"Resource not found at {url}")

            if response.status_code in RETRY_STATUS_CODES:
                last_status = response.status_code
                last_exc = FetchError(f"HTTP {response.status_code} from {url}")
            elif 400 <= response.status_code < 500:
                raise FetchError(f"HTTP {response.status_code} from {url}: {response.text[:200]}")
            else:
                response.raise_for_status()
                return response
        except (httpx.RequestError, httpx.HTTPStatusError) as exc:
            last_status = None
            last_exc = exc

        if attempt < FEISHU2MD_FETCH_MAX_RETRIES:
            backoff = FEISHU2MD_FETCH_BACKOFF_S * (2**attempt)
            logger.debug("Retrying %s %s in %.2fs after %s", method, url, backoff, last_exc)
            await asyncio.sleep(backoff)

    if last_status == 429:
        raise RateLimitError(f"Rate limited by {url}")
    raise FetchError(f"Failed to fetch {url}: {last_exc}")
