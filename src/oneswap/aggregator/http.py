"""JSON-over-HTTP fetcher used by the aggregator client.

The aggregator reports failures in the response body (``error`` plus an
optional ``description``) rather than through status codes, so the status is
not inspected here.
"""

import logging
from typing import Any, Optional

import httpx

from oneswap.exceptions import (
    EmptyResponseError,
    MalformedResponseError,
    NetworkError,
    RemoteError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


async def fetch_json(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Args:
        url: Absolute URL to fetch
        params: Query parameters, sent in insertion order
        headers: Extra request headers
        client: Shared client; a short-lived one is created when omitted
        timeout: Seconds before the request is abandoned (new clients only)

    Returns:
        The parsed JSON value, unchanged

    Raises:
        NetworkError: transport failure, timeout or undecodable body encoding
        EmptyResponseError: empty body or JSON ``null``
        MalformedResponseError: body is not JSON
        RemoteError: body carries an ``error`` field
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(url, params=params, headers=headers)
        else:
            response = await client.get(url, params=params, headers=headers)
    except httpx.RequestError as e:
        logger.error(f"Aggregator request failed: {type(e).__name__}: {e}")
        raise NetworkError(f"Request to {url} failed: {e}") from e

    logger.debug(f"GET {response.request.url} -> {response.status_code}")

    if not response.content.strip():
        raise EmptyResponseError("no response")

    try:
        payload = response.json()
    except ValueError as e:
        logger.warning(f"Non-JSON aggregator response ({response.status_code}): {response.text[:200]}")
        raise MalformedResponseError("response is not JSON", payload=response.text) from e

    if payload is None:
        raise EmptyResponseError("no response")

    if isinstance(payload, dict) and payload.get("error"):
        logger.warning(f"Aggregator error payload: {payload}")
        message = payload.get("description") or payload["error"]
        raise RemoteError(str(message), payload=payload)

    return payload
