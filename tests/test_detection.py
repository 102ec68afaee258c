"""Tests for location format detection."""

import pytest

from pinpoint.detection import detect_format, format_label
from pinpoint.models import DetectedFormat


class TestDetectFormat:
    @pytest.mark.parametrize("text", ["SW1A 2AA", "sw1a2aa", "M1 1AE", "  EC1A 1BB  ", "B33 8TH", "CR2 6XH"])
    def test_postcode(self, text):
        assert detect_format(text) is DetectedFormat.POSTCODE

    @pytest.mark.parametrize("text", ["TQ3016380311", "TQ 30163 80311", "tq38", "NT 259 739", "HP40001200"])
    def test_national_grid(self, text):
        assert detect_format(text) is DetectedFormat.NATIONAL_GRID

    @pytest.mark.parametrize("text", ["///filled.count.soap", "filled.count.soap", "Index.Home.Raft"])
    def test_three_word_address(self, text):
        assert detect_format(text) is DetectedFormat.THREE_WORD_ADDRESS

    @pytest.mark.parametrize(
        "text",
        ['51°30\'26.4"N 0°07\'40.1"W', "51.5 N 0.1 W", "N51 30 W0 7", "40°, 70°", "51′ 30″"],
    )
    def test_dms(self, text):
        assert detect_format(text) is DetectedFormat.DEGREES_MINUTES_SECONDS

    @pytest.mark.parametrize("text", ["51.5074, -0.1278", "51.5074 -0.1278", "40 70", "-33.9,151.2,9"])
    def test_decimal(self, text):
        assert detect_format(text) is DetectedFormat.DECIMAL

    @pytest.mark.parametrize("text", ["", "   ", "42", "ZZ99999999", "TI1234", "12 ab", "!!!", "1.2.3 4"])
    def test_unknown(self, text):
        assert detect_format(text) is DetectedFormat.UNKNOWN

    def test_postcode_takes_precedence(self):
        # Postcode-shaped input is never treated as anything else
        assert detect_format("NW1 6XE") is DetectedFormat.POSTCODE

    def test_grid_before_dms(self):
        # S/N/E/W letters are DMS markers, but grid shape wins
        assert detect_format("SN1234") is DetectedFormat.NATIONAL_GRID

    @pytest.mark.parametrize(
        "text",
        ["°", "////", "\n\t", "1,", ",,,", "a.b", "...", "- -", "°°°NSEW", "\x00", "ß", "💡 51 0"],
    )
    def test_total(self, text):
        assert isinstance(detect_format(text), DetectedFormat)

    def test_wire_values(self):
        assert DetectedFormat("osgrid") is DetectedFormat.NATIONAL_GRID
        assert DetectedFormat.THREE_WORD_ADDRESS.value == "w3w"


class TestFormatLabel:
    def test_every_format_has_label(self):
        for fmt in DetectedFormat:
            assert format_label(fmt)

    def test_labels(self):
        assert format_label(DetectedFormat.POSTCODE) == "UK Postcode"
        assert format_label(DetectedFormat.NATIONAL_GRID) == "OS Grid Reference"
        assert format_label(DetectedFormat.UNKNOWN) == "Unknown format"
