"""Spherical geodesy endpoints used by the measurement tools."""

from fastapi import APIRouter, Query

from ..geodesy import bearing_to, destination_point, distance_between
from ..models import GeoPoint
from ..schemas import GeoPointOut, InverseResponse

router = APIRouter(prefix="/geodesy", tags=["geodesy"])


@router.get("/destination", response_model=GeoPointOut)
def get_destination(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    bearing: float = Query(..., allow_inf_nan=False, description="Degrees clockwise from north"),
    distance: float = Query(..., ge=0, allow_inf_nan=False, description="Metres"),
):
    """Point reached from (lat, lng) after *distance* metres on *bearing*."""
    return destination_point(GeoPoint(lat, lng), bearing, distance)


@router.get("/inverse", response_model=InverseResponse)
def get_inverse(
    lat1: float = Query(..., ge=-90, le=90),
    lng1: float = Query(..., ge=-180, le=180),
    lat2: float = Query(..., ge=-90, le=90),
    lng2: float = Query(..., ge=-180, le=180),
):
    """Initial bearing and great-circle distance between two points."""
    a = GeoPoint(lat1, lng1)
    b = GeoPoint(lat2, lng2)
    return InverseResponse(bearing=bearing_to(a, b), distance_m=distance_between(a, b))
