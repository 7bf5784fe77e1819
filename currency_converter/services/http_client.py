from __future__ import annotations

"""Minimal async HTTP JSON client.

One GET, one attempt. Callers decide what a failure means; this module only
normalizes every way the request can go wrong into `HttpError`.
"""
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("converter.http")


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    logger.debug("GET %s", url)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, headers={"Accept": "application/json"})
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as e:
        raise HttpError(f"HTTP {e.response.status_code} for {url}") from e
    except httpx.HTTPError as e:
        raise HttpError(f"Request to {url} failed: {e!r}") from e
    except ValueError as e:  # body is not JSON
        raise HttpError(f"Invalid JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Expected a JSON object from {url}, got {type(data).__name__}")
    return data
