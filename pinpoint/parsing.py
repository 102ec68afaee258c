"""Parsers for coordinates typed as decimal pairs or degrees/minutes/seconds."""

import re
from typing import Optional

from .models import DMSToken, GeoPoint, make_point

_SEPARATOR_RE = re.compile(r"[,\s]+")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

_HEMISPHERES = "NSEW"
_DEGREE_MARKS = "\u00b0"
_MINUTE_MARKS = "'\u2019\u2032"
_SECOND_MARKS = "\"\u201d\u2033"


def split_coordinate_tokens(text: str) -> list[str]:
    """Split on runs of commas and whitespace, dropping empty pieces."""
    return [p for p in _SEPARATOR_RE.split(text.strip()) if p]


def parse_number(token: str) -> Optional[float]:
    """Parse a plain decimal number like '-0.1278'. Returns None otherwise."""
    if not _NUMBER_RE.fullmatch(token):
        return None
    return float(token)


def parse_decimal(text: str) -> Optional[GeoPoint]:
    """Parse '51.5074, -0.1278' or '51.5074 -0.1278' into a GeoPoint.

    Extra tokens after the first two are ignored.
    Returns None if the first two tokens are not numbers or are out of range.
    """
    parts = split_coordinate_tokens(text)
    if len(parts) < 2:
        return None
    lat = parse_number(parts[0])
    lng = parse_number(parts[1])
    if lat is None or lng is None:
        return None
    return make_point(lat, lng)


# ── DMS ──────────────────────────────────────────────────────────


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts' digits
    return len(ch) == 1 and "0" <= ch <= "9"


class _Scanner:
    """Cursor over a DMS string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def done(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def accept(self, chars: str) -> str:
        """Consume one character if it is in *chars*."""
        ch = self.peek()
        if ch and ch in chars:
            self.pos += 1
            return ch
        return ""

    def skip(self, chars: str) -> int:
        """Consume any run of *chars* and whitespace; return how many."""
        start = self.pos
        while not self.done() and (self.peek() in chars or self.peek().isspace()):
            self.pos += 1
        return self.pos - start

    def hemisphere(self) -> Optional[str]:
        ch = self.peek().upper()
        if ch and ch in _HEMISPHERES:
            self.pos += 1
            return ch
        return None

    def at_hemisphere(self) -> bool:
        ch = self.peek().upper()
        return bool(ch) and ch in _HEMISPHERES

    def number(self) -> Optional[float]:
        """Consume digits with an optional fractional part."""
        start = self.pos
        while _is_digit(self.peek()):
            self.pos += 1
        if self.pos == start:
            return None
        if self.peek() == "." and _is_digit(self.text[self.pos + 1:self.pos + 2]):
            self.pos += 1
            while _is_digit(self.peek()):
                self.pos += 1
        return float(self.text[start:self.pos])

    def component(self) -> float:
        """Consume a minutes or seconds value, or return 0 if there isn't one.

        A number followed by a degree mark is the next angle's degrees and
        is left in place.
        """
        start = self.pos
        value = self.number()
        if value is None:
            return 0.0
        end = self.pos
        self.skip("")
        if self.peek() and self.peek() in _DEGREE_MARKS:
            self.pos = start
            return 0.0
        self.pos = end
        return value


def _read_token(scanner: _Scanner) -> Optional[DMSToken]:
    """Read one angle at the scanner position, or None if there isn't one.

    Grammar: [H] [-]D (°|space|H) [M] ['] [S] ["] [H]
    A trailing hemisphere letter is only taken when there was no leading
    one, otherwise it belongs to the next angle.
    Minutes and seconds stop short of a number marked with a degree sign.
    """
    lead = scanner.hemisphere()
    scanner.skip("")
    negative = bool(scanner.accept("-"))

    degrees = scanner.number()
    if degrees is None:
        return None
    if not scanner.skip(_DEGREE_MARKS) and not scanner.at_hemisphere():
        return None

    minutes = scanner.component()
    scanner.skip(_MINUTE_MARKS)
    seconds = scanner.component()
    scanner.skip(_SECOND_MARKS)

    hemisphere = lead or scanner.hemisphere()

    value = degrees + minutes / 60 + seconds / 3600
    if negative or hemisphere in ("S", "W"):
        value = -value
    return DMSToken(value=value, hemisphere=hemisphere)


def scan_dms_tokens(text: str) -> list[DMSToken]:
    """Extract every DMS angle from *text*, left to right."""
    scanner = _Scanner(text)
    tokens: list[DMSToken] = []
    while not scanner.done():
        start = scanner.pos
        token = _read_token(scanner)
        if token is None:
            scanner.pos = start + 1
        else:
            tokens.append(token)
    return tokens


def _is_latitude(token: DMSToken) -> bool:
    return token.hemisphere in ("N", "S")


def _is_longitude(token: DMSToken) -> bool:
    return token.hemisphere in ("E", "W")


def parse_dms(text: str) -> Optional[GeoPoint]:
    """Parse degrees/minutes/seconds text into a GeoPoint.

    Handles forms such as:
        51°30'26.4"N 0°07'40.1"W
        51 30 26.4 N, 0 07 40.1 W
        N51°30'26.4" W0°07'40.1"
        51.508 N 0.128 W

    Hemisphere letters decide which angle is latitude. With no letters at
    all the first angle is taken as latitude.
    """
    tokens = scan_dms_tokens(text.strip())
    if len(tokens) < 2:
        return None

    first, second = tokens[0], tokens[1]
    if _is_latitude(first) or _is_latitude(second):
        lat, lng = (first, second) if _is_latitude(first) else (second, first)
    elif _is_longitude(first) or _is_longitude(second):
        lng, lat = (first, second) if _is_longitude(first) else (second, first)
    else:
        lat, lng = first, second

    return make_point(lat.value, lng.value)
