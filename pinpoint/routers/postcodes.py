"""Postcode endpoints."""

from fastapi import APIRouter

from ..resolvers.geocoding import lookup_postcodes_bulk, normalise_postcode_key
from ..schemas import BulkPostcodeRequest, BulkPostcodeResponse, GeoPointOut

router = APIRouter(prefix="/postcodes", tags=["postcodes"])


@router.post("/bulk", response_model=BulkPostcodeResponse)
async def bulk_postcodes(payload: BulkPostcodeRequest):
    """Geocode up to 1000 postcodes via Postcodes.io, 100 per upstream request.

    Result keys are upper-case with spaces removed ('SW1A2AA').
    """
    results = await lookup_postcodes_bulk(payload.postcodes)
    requested = dict.fromkeys(normalise_postcode_key(pc) for pc in payload.postcodes if pc.strip())
    return BulkPostcodeResponse(
        results={key: GeoPointOut.model_validate(point) for key, point in results.items()},
        missing=[key for key in requested if key not in results],
    )
