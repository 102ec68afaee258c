"""Location endpoints: format detection, single and batch resolution."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from ..config import RATE_LIMIT_RESOLVE, W3W_API_KEY
from ..detection import detect_format, format_label
from ..limiter import limiter
from ..models import ResolvedLocation
from ..resolve import resolve, resolve_many
from ..schemas import (
    DetectResponse,
    GeoPointOut,
    ResolveBatchRequest,
    ResolveBatchResponse,
    ResolveRequest,
    ResolveResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/locations", tags=["locations"])


def _to_response(location: ResolvedLocation) -> ResolveResponse:
    return ResolveResponse(
        input=location.input,
        format=location.format,
        format_label=format_label(location.format),
        point=GeoPointOut.model_validate(location.point) if location.point else None,
    )


@router.get("/detect", response_model=DetectResponse)
def detect_location_format(
    input: str = Query(..., min_length=1, max_length=200, description="Location as typed by the user"),
):
    """Report which notation a location string is written in."""
    fmt = detect_format(input)
    return DetectResponse(input=input.strip(), format=fmt, format_label=format_label(fmt))


@router.post("/resolve", response_model=ResolveResponse)
@limiter.limit(RATE_LIMIT_RESOLVE)
async def resolve_location(request: Request, payload: ResolveRequest):
    """Resolve a postcode, OS grid reference, what3words address, DMS or
    decimal coordinate string to WGS84.

    The what3words key in the request takes precedence over the configured one.
    """
    text = payload.input.strip()
    point = await resolve(text, payload.w3w_api_key or W3W_API_KEY)
    if point is None:
        raise HTTPException(
            status_code=404,
            detail=f"Could not resolve location '{text}'. Check the format and try again.",
        )
    return _to_response(ResolvedLocation(input=text, format=detect_format(text), point=point))


@router.post("/resolve-batch", response_model=ResolveBatchResponse)
@limiter.limit(RATE_LIMIT_RESOLVE)
async def resolve_locations(request: Request, payload: ResolveBatchRequest):
    """Resolve many locations at once. Postcodes are looked up in bulk.

    Failures are reported per row with a null point.
    """
    results = await resolve_many(payload.inputs, payload.w3w_api_key or W3W_API_KEY)
    resolved = sum(1 for r in results if r.resolved)
    return ResolveBatchResponse(
        results=[_to_response(r) for r in results],
        resolved=resolved,
        failed=len(results) - resolved,
    )
