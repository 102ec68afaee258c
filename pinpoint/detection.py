"""Classify a raw location string by the notation it is written in."""

import re

from .models import DetectedFormat
from .parsing import parse_number, split_coordinate_tokens

UK_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}$", re.IGNORECASE)
OS_GRID_RE = re.compile(r"^[STNOHJ][A-HJ-Z]\d{2,10}$", re.IGNORECASE)
W3W_RE = re.compile(r"^/{0,3}[a-z]+\.[a-z]+\.[a-z]+$", re.IGNORECASE)
DMS_MARKER_RE = re.compile("[°'\"’′”″NSEW]", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")

_LABELS = {
    DetectedFormat.POSTCODE: "UK Postcode",
    DetectedFormat.NATIONAL_GRID: "OS Grid Reference",
    DetectedFormat.DEGREES_MINUTES_SECONDS: "Degrees Minutes Seconds",
    DetectedFormat.THREE_WORD_ADDRESS: "What3Words",
    DetectedFormat.DECIMAL: "Decimal Lat/Lng",
    DetectedFormat.UNKNOWN: "Unknown format",
}


def detect_format(text: str) -> DetectedFormat:
    """Work out which notation *text* uses.

    Checks run in a fixed order (postcode, grid reference, what3words, DMS,
    decimal) and the first match wins. Anything else, including an empty
    string, is UNKNOWN.
    """
    text = text.strip()
    if not text:
        return DetectedFormat.UNKNOWN

    if UK_POSTCODE_RE.match(text):
        return DetectedFormat.POSTCODE
    if OS_GRID_RE.match(_WHITESPACE_RE.sub("", text)):
        return DetectedFormat.NATIONAL_GRID
    if W3W_RE.match(text):
        return DetectedFormat.THREE_WORD_ADDRESS
    if DMS_MARKER_RE.search(text):
        return DetectedFormat.DEGREES_MINUTES_SECONDS

    parts = split_coordinate_tokens(text)
    if len(parts) >= 2 and parse_number(parts[0]) is not None and parse_number(parts[1]) is not None:
        return DetectedFormat.DECIMAL
    return DetectedFormat.UNKNOWN


def format_label(fmt: DetectedFormat) -> str:
    """Human-readable name for a detected format."""
    return _LABELS[fmt]
