"""Value types shared by the parsers, resolvers and the orchestrator."""

import enum
import math
from dataclasses import dataclass
from typing import Optional


class DetectedFormat(str, enum.Enum):
    """Notation a raw location string was recognised as."""

    NATIONAL_GRID = "osgrid"
    POSTCODE = "postcode"
    THREE_WORD_ADDRESS = "w3w"
    DEGREES_MINUTES_SECONDS = "dms"
    DECIMAL = "decimal"
    UNKNOWN = "unknown"


def _valid(lat: float, lng: float) -> bool:
    return (
        math.isfinite(lat)
        and math.isfinite(lng)
        and -90 <= lat <= 90
        and -180 <= lng <= 180
    )


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self):
        if not _valid(self.lat, self.lng):
            raise ValueError(f"Coordinates out of range: ({self.lat}, {self.lng})")

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


def make_point(lat, lng) -> Optional[GeoPoint]:
    """Build a GeoPoint, or return None if the values are not valid coordinates.

    Accepts anything float() accepts, so raw JSON payload values can be
    passed straight through.
    """
    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        return None
    if not _valid(lat, lng):
        return None
    return GeoPoint(lat, lng)


@dataclass(frozen=True)
class DMSToken:
    """One angle pulled out of a DMS string, already in signed decimal degrees."""

    value: float
    hemisphere: Optional[str] = None  # N, S, E, W


@dataclass(frozen=True)
class ResolvedLocation:
    """Outcome of resolving one line of a batch."""

    input: str
    format: DetectedFormat
    point: Optional[GeoPoint] = None

    @property
    def resolved(self) -> bool:
        return self.point is not None
