"""Resolve a location typed in any supported notation to a WGS84 point.

Parsing is synchronous; postcode and what3words inputs go out to the network
and are awaited. Nothing here raises for bad input or network failure: the
answer is always a complete GeoPoint or None.
"""

import logging
from typing import Callable, Iterable, Optional

import httpx

from . import config
from .detection import detect_format
from .models import DetectedFormat, GeoPoint, ResolvedLocation
from .parsing import parse_decimal, parse_dms
from .resolvers.coord_convert import parse_os_grid
from .resolvers.geocoding import lookup_postcode, lookup_postcodes_bulk, normalise_postcode_key
from .resolvers.http import open_client
from .resolvers.what3words import lookup_what3words

logger = logging.getLogger(__name__)

Parser = Callable[[str], Optional[GeoPoint]]

# Offline parsers to try, in order, for each format.
# Decimal-looking input goes through the DMS parser first so that
# '51.5 N 0.1 W' keeps its hemisphere signs.
_OFFLINE_PARSERS: dict[DetectedFormat, tuple[Parser, ...]] = {
    DetectedFormat.DECIMAL: (parse_dms, parse_decimal),
    DetectedFormat.DEGREES_MINUTES_SECONDS: (parse_dms,),
    DetectedFormat.NATIONAL_GRID: (parse_os_grid,),
    DetectedFormat.UNKNOWN: (parse_decimal, parse_dms, parse_os_grid),
}


def _first_match(parsers: Iterable[Parser], text: str) -> Optional[GeoPoint]:
    for parser in parsers:
        point = parser(text)
        if point is not None:
            return point
    return None


async def resolve(
    text: str,
    w3w_api_key: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GeoPoint]:
    """Resolve *text* to a GeoPoint, or None if it cannot be resolved.

    Args:
        text: Postcode, OS grid reference, ///what3words address, DMS or
            decimal coordinates.
        w3w_api_key: what3words key; what3words input resolves to None
            without one.
        client: Optional shared httpx.AsyncClient for the network lookups.
    """
    text = text.strip()
    fmt = detect_format(text)

    if fmt is DetectedFormat.POSTCODE:
        return await lookup_postcode(text, client)
    if fmt is DetectedFormat.THREE_WORD_ADDRESS:
        return await lookup_what3words(text, w3w_api_key, client)
    return _first_match(_OFFLINE_PARSERS[fmt], text)


async def resolve_many(
    lines: Iterable[str],
    w3w_api_key: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> list[ResolvedLocation]:
    """Resolve a list of locations, one per entry, preserving order.

    Blank entries are skipped. Postcodes are looked up together in bulk
    requests; everything else goes through resolve() one at a time.
    """
    entries = [(line.strip(), detect_format(line)) for line in lines if line and line.strip()]
    postcodes = [text for text, fmt in entries if fmt is DetectedFormat.POSTCODE]

    results: list[ResolvedLocation] = []
    async with open_client(client, config.GEOCODER_BULK_TIMEOUT) as http:
        bulk = await lookup_postcodes_bulk(postcodes, http) if postcodes else {}
        for text, fmt in entries:
            if fmt is DetectedFormat.POSTCODE:
                point = bulk.get(normalise_postcode_key(text))
            else:
                point = await resolve(text, w3w_api_key, http)
            results.append(ResolvedLocation(input=text, format=fmt, point=point))

    resolved = sum(1 for r in results if r.resolved)
    logger.info("Resolved %d/%d locations (%d failed)", resolved, len(results), len(results) - resolved)
    return results
