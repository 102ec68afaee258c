"""Pure Python conversion from OS National Grid references (OSGB36) to WGS84.

Grid letters are decoded to easting/northing, the transverse Mercator
projection is inverted on the Airy 1830 ellipsoid, and the result is moved
onto WGS84 with the 7-parameter Helmert transformation.
Accuracy: a few metres, the limit of the Helmert approximation.
No external dependencies (no pyproj).
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from ..models import GeoPoint, make_point

# Airy 1830 ellipsoid (OSGB36)
_AIRY_A = 6377563.396  # semi-major axis
_AIRY_B = 6356256.909  # semi-minor axis
_AIRY_E2 = 1 - (_AIRY_B ** 2) / (_AIRY_A ** 2)

# National Grid projection constants
_N0 = -100000.0  # northing of true origin
_E0 = 400000.0   # easting of true origin
_F0 = 0.9996012717  # scale factor on central meridian
_PHI0 = math.radians(49.0)  # latitude of true origin
_LAMBDA0 = math.radians(-2.0)  # longitude of true origin

# WGS84 ellipsoid
_WGS84_A = 6378137.0
_WGS84_B = 6356752.3141
_WGS84_E2 = 1 - (_WGS84_B ** 2) / (_WGS84_A ** 2)

# Helmert parameters: OSGB36 -> WGS84
_TX = 446.448
_TY = -125.157
_TZ = 542.060
_S = -20.4894e-6  # scale (ppm)
_RX = math.radians(0.1502 / 3600)
_RY = math.radians(0.2470 / 3600)
_RZ = math.radians(0.8421 / 3600)

_ARC_TOLERANCE_M = 0.00001
_MAX_ARC_ITERATIONS = 100
_GEODETIC_PASSES = 10

# ── Grid letters ─────────────────────────────────────────────────
# (easting, northing) index of each square; major squares are 500 km,
# minor squares 100 km. "I" is not used by the grid.

GRID_MAJOR_SQUARES: dict[str, tuple[int, int]] = {
    "S": (0, 0), "T": (1, 0),
    "N": (0, 1), "O": (1, 1),
    "H": (0, 2), "J": (1, 2),
}

GRID_MINOR_SQUARES: dict[str, tuple[int, int]] = {
    "A": (0, 4), "B": (1, 4), "C": (2, 4), "D": (3, 4), "E": (4, 4),
    "F": (0, 3), "G": (1, 3), "H": (2, 3), "J": (3, 3), "K": (4, 3),
    "L": (0, 2), "M": (1, 2), "N": (2, 2), "O": (3, 2), "P": (4, 2),
    "Q": (0, 1), "R": (1, 1), "S": (2, 1), "T": (3, 1), "U": (4, 1),
    "V": (0, 0), "W": (1, 0), "X": (2, 0), "Y": (3, 0), "Z": (4, 0),
}

# Extent of the National Grid in metres. The projection series is only
# valid inside it.
GRID_MAX_EASTING = 700000
GRID_MAX_NORTHING = 1300000

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class GridReference:
    """An OS grid reference split into its square letters and digit string."""

    major: str
    minor: str
    digits: str  # even length, 2-10

    def easting_northing(self) -> tuple[float, float]:
        """Full easting/northing in metres."""
        half = len(self.digits) // 2
        multiplier = 10 ** (5 - half)
        easting = int(self.digits[:half]) * multiplier
        northing = int(self.digits[half:]) * multiplier

        maj_e, maj_n = GRID_MAJOR_SQUARES[self.major]
        min_e, min_n = GRID_MINOR_SQUARES[self.minor]
        easting += maj_e * 500000 + min_e * 100000
        northing += maj_n * 500000 + min_n * 100000
        return float(easting), float(northing)


def parse_grid_reference(ref: str) -> Optional[GridReference]:
    """Split a reference like 'TQ 30163 80311' into letters and digits.

    Returns None if the letters are not grid squares or the digits are not an
    even-length run of 2-10 digits.
    """
    ref = _WHITESPACE_RE.sub("", ref).upper()
    if len(ref) < 4:
        return None

    major, minor, digits = ref[0], ref[1], ref[2:]
    if major not in GRID_MAJOR_SQUARES or minor not in GRID_MINOR_SQUARES:
        return None
    if len(digits) % 2 != 0 or not 2 <= len(digits) <= 10:
        return None
    # isdigit() accepts superscripts and other unicode digits
    if not all("0" <= ch <= "9" for ch in digits):
        return None
    return GridReference(major, minor, digits)


# ── Projection inversion ─────────────────────────────────────────


def _meridional_arc(phi, phi0, a, b):
    """Compute meridional arc distance from phi0 to phi."""
    n = (a - b) / (a + b)
    n2 = n * n
    n3 = n2 * n

    dphi = phi - phi0
    sphi = phi + phi0

    ma = (1 + n + (5.0 / 4.0) * n2 + (5.0 / 4.0) * n3) * dphi
    mb = (3 * n + 3 * n2 + (21.0 / 8.0) * n3) * math.sin(dphi) * math.cos(sphi)
    mc = ((15.0 / 8.0) * n2 + (15.0 / 8.0) * n3) * math.sin(2 * dphi) * math.cos(2 * sphi)
    md = (35.0 / 24.0) * n3 * math.sin(3 * dphi) * math.cos(3 * sphi)

    return b * _F0 * (ma - mb + mc - md)


def _foot_point_latitude(northing: float) -> float:
    """Latitude whose meridional arc matches the northing, in radians."""
    phi = _PHI0
    m = 0.0
    for _ in range(_MAX_ARC_ITERATIONS):
        phi = (northing - _N0 - m) / (_AIRY_A * _F0) + phi
        m = _meridional_arc(phi, _PHI0, _AIRY_A, _AIRY_B)
        if abs(northing - _N0 - m) < _ARC_TOLERANCE_M:
            break
    return phi


def _bng_to_osgb36(easting, northing):
    """Convert BNG easting/northing to OSGB36 lat/lon in radians."""
    a = _AIRY_A
    e2 = _AIRY_E2

    phi = _foot_point_latitude(northing)

    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)
    tan_phi = math.tan(phi)

    nu = a * _F0 / math.sqrt(1 - e2 * sin_phi ** 2)
    rho = a * _F0 * (1 - e2) / (1 - e2 * sin_phi ** 2) ** 1.5
    eta2 = nu / rho - 1

    de = easting - _E0

    VII = tan_phi / (2 * rho * nu)
    VIII = tan_phi / (24 * rho * nu ** 3) * (5 + 3 * tan_phi ** 2 + eta2 - 9 * tan_phi ** 2 * eta2)
    IX = tan_phi / (720 * rho * nu ** 5) * (61 + 90 * tan_phi ** 2 + 45 * tan_phi ** 4)
    X = 1 / (cos_phi * nu)
    XI = 1 / (6 * cos_phi * nu ** 3) * (nu / rho + 2 * tan_phi ** 2)
    XII = 1 / (120 * cos_phi * nu ** 5) * (5 + 28 * tan_phi ** 2 + 24 * tan_phi ** 4)
    XIIA = 1 / (5040 * cos_phi * nu ** 7) * (61 + 662 * tan_phi ** 2 + 1320 * tan_phi ** 4 + 720 * tan_phi ** 6)

    lat = phi - VII * de ** 2 + VIII * de ** 4 - IX * de ** 6
    lon = _LAMBDA0 + X * de - XI * de ** 3 + XII * de ** 5 - XIIA * de ** 7

    return lat, lon


def grid_to_osgb36(easting: float, northing: float) -> tuple[float, float]:
    """Invert the National Grid projection to OSGB36 (lat, lon) in degrees."""
    lat, lon = _bng_to_osgb36(easting, northing)
    return math.degrees(lat), math.degrees(lon)


# ── Datum shift ──────────────────────────────────────────────────


def _helmert_transform(lat_rad, lon_rad):
    """Apply Helmert transformation from OSGB36 to WGS84."""
    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    sin_lon = math.sin(lon_rad)
    cos_lon = math.cos(lon_rad)

    nu = _AIRY_A / math.sqrt(1 - _AIRY_E2 * sin_lat ** 2)

    # Cartesian coordinates, height = 0
    x = nu * cos_lat * cos_lon
    y = nu * cos_lat * sin_lon
    z = nu * (1 - _AIRY_E2) * sin_lat

    x2 = _TX + (1 + _S) * x + (-_RZ) * y + _RY * z
    y2 = _TY + _RZ * x + (1 + _S) * y + (-_RX) * z
    z2 = _TZ + (-_RY) * x + _RX * y + (1 + _S) * z

    # Back to geodetic on WGS84
    p = math.sqrt(x2 ** 2 + y2 ** 2)
    lat2 = math.atan2(z2, p * (1 - _WGS84_E2))

    for _ in range(_GEODETIC_PASSES):
        nu2 = _WGS84_A / math.sqrt(1 - _WGS84_E2 * math.sin(lat2) ** 2)
        lat2 = math.atan2(z2 + _WGS84_E2 * nu2 * math.sin(lat2), p)

    lon2 = math.atan2(y2, x2)
    return lat2, lon2


def osgb36_to_wgs84(lat: float, lon: float) -> GeoPoint:
    """Move an OSGB36 (lat, lon) in degrees onto the WGS84 datum."""
    lat_wgs, lon_wgs = _helmert_transform(math.radians(lat), math.radians(lon))
    return GeoPoint(math.degrees(lat_wgs), math.degrees(lon_wgs))


# ── Public entry points ──────────────────────────────────────────


def bng_to_wgs84(easting, northing) -> Optional[GeoPoint]:
    """Convert British National Grid easting/northing to a WGS84 point.

    Args:
        easting: BNG easting in metres
        northing: BNG northing in metres

    Returns:
        GeoPoint in decimal degrees, or None if the inputs are not numbers
        or fall outside the National Grid.
    """
    try:
        easting = float(easting)
        northing = float(northing)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(easting) and math.isfinite(northing)):
        return None
    if easting < 0 or easting > GRID_MAX_EASTING or northing < 0 or northing > GRID_MAX_NORTHING:
        return None

    lat, lon = _helmert_transform(*_bng_to_osgb36(easting, northing))
    return make_point(math.degrees(lat), math.degrees(lon))


def parse_os_grid(ref: str) -> Optional[GeoPoint]:
    """Resolve a grid reference string such as 'TQ3016380311' to WGS84."""
    grid_ref = parse_grid_reference(ref)
    if grid_ref is None:
        return None
    return bng_to_wgs84(*grid_ref.easting_northing())
