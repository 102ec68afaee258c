"""what3words address lookup (requires an API key)."""

import logging
from typing import Optional

import httpx

from .. import config
from ..models import GeoPoint, make_point
from .http import PAYLOAD_ERRORS, open_client

logger = logging.getLogger(__name__)


async def lookup_what3words(
    words: str,
    api_key: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GeoPoint]:
    """Convert a ///three.word.address to a GeoPoint.

    Returns None straight away, without a request, when no API key is given.
    """
    if not api_key:
        return None
    words = words.strip().lstrip("/")
    if not words:
        return None

    try:
        async with open_client(client, config.GEOCODER_TIMEOUT) as http:
            resp = await http.get(
                f"{config.W3W_API_URL}/convert-to-coordinates",
                params={"words": words, "key": api_key},
                timeout=config.GEOCODER_TIMEOUT,
            )
            resp.raise_for_status()
            data = resp.json()
        coords = data.get("coordinates")
        if coords:
            return make_point(coords["lat"], coords["lng"])
    except (httpx.RequestError, httpx.HTTPStatusError, *PAYLOAD_ERRORS) as e:
        logger.warning("what3words lookup failed for %s: %s", words, e)
    return None
