"""Postcode geocoding via Postcodes.io (free, no auth).

Provides single and batch postcode-to-coordinates conversion.
"""

import logging
from typing import Iterable, Optional
from urllib.parse import quote

import httpx

from .. import config
from ..models import GeoPoint, make_point
from .http import PAYLOAD_ERRORS, open_client

logger = logging.getLogger(__name__)

# Postcodes.io accepts max 100 postcodes per bulk request
POSTCODES_IO_BATCH_LIMIT = 100


def normalise_postcode_key(postcode: str) -> str:
    """Key used for bulk results: upper-case with all whitespace removed."""
    return "".join(postcode.split()).upper()


async def lookup_postcode(
    postcode: str, client: Optional[httpx.AsyncClient] = None
) -> Optional[GeoPoint]:
    """Convert a UK postcode to a GeoPoint via Postcodes.io.

    Returns None if the postcode is unknown or the service cannot be reached.
    """
    postcode = postcode.strip().upper()
    if not postcode:
        return None

    url = f"{config.POSTCODES_IO_URL}/{quote(postcode, safe='')}"
    try:
        async with open_client(client, config.GEOCODER_TIMEOUT) as http:
            resp = await http.get(url, timeout=config.GEOCODER_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        if data.get("status") == 200 and data.get("result"):
            result = data["result"]
            return make_point(result["latitude"], result["longitude"])
    except (httpx.RequestError, httpx.HTTPStatusError, *PAYLOAD_ERRORS) as e:
        logger.warning("Postcode lookup failed for %s: %s", postcode, e)
    return None


async def lookup_postcodes_bulk(
    postcodes: Iterable[str], client: Optional[httpx.AsyncClient] = None
) -> dict[str, GeoPoint]:
    """Batch geocode UK postcodes via Postcodes.io.

    Args:
        postcodes: Postcode strings, any case or spacing. Sent in chunks of
            at most 100, one request per chunk.
        client: Optional shared httpx.AsyncClient.

    Returns:
        Dict mapping normalised postcode (e.g. 'SW1A2AA') -> GeoPoint.
        Postcodes that could not be resolved are omitted. A failed chunk
        only loses its own postcodes.
    """
    postcodes = [pc.strip() for pc in postcodes if pc and pc.strip()]
    results: dict[str, GeoPoint] = {}
    if not postcodes:
        return results

    wanted = {normalise_postcode_key(pc) for pc in postcodes}

    async with open_client(client, config.GEOCODER_BULK_TIMEOUT) as http:
        for i in range(0, len(postcodes), POSTCODES_IO_BATCH_LIMIT):
            chunk = postcodes[i:i + POSTCODES_IO_BATCH_LIMIT]
            try:
                resp = await http.post(
                    config.POSTCODES_IO_URL, json={"postcodes": chunk}, timeout=config.GEOCODER_BULK_TIMEOUT
                )
                resp.raise_for_status()
                data = resp.json()
                if data.get("status") != 200:
                    logger.warning(
                        "Batch postcode lookup for chunk starting at %d returned status %s",
                        i, data.get("status"),
                    )
                    continue
                for item in data.get("result") or []:
                    if not item or not item.get("result"):
                        continue
                    key = normalise_postcode_key(item["query"])
                    point = make_point(item["result"].get("latitude"), item["result"].get("longitude"))
                    if key in wanted and point is not None:
                        results[key] = point
            except (httpx.RequestError, httpx.HTTPStatusError, *PAYLOAD_ERRORS) as e:
                logger.warning("Batch postcode lookup failed for chunk starting at %d: %s", i, e)

    logger.info("Bulk postcode lookup resolved %d/%d postcodes", len(results), len(wanted))
    return results
