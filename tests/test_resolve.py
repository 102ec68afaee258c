"""Tests for the top-level resolve() and resolve_many() entry points."""

import json

import httpx
import pytest

from pinpoint import config
from pinpoint.models import DetectedFormat, GeoPoint
from pinpoint.resolve import resolve, resolve_many


class TestResolveOffline:
    @pytest.mark.asyncio
    async def test_decimal_comma(self):
        assert await resolve("51.5074, -0.1278") == GeoPoint(51.5074, -0.1278)

    @pytest.mark.asyncio
    async def test_decimal_space(self):
        assert await resolve("  -33.8688 151.2093 ") == GeoPoint(-33.8688, 151.2093)

    @pytest.mark.asyncio
    async def test_decimal_with_hemispheres(self):
        point = await resolve("51.508 N 0.128 W")
        assert point.lat == pytest.approx(51.508)
        assert point.lng == pytest.approx(-0.128)

    @pytest.mark.asyncio
    async def test_dms(self):
        point = await resolve("51°30'26.4\"N 0°07'40.1\"W")
        assert point.lat == pytest.approx(51.507333, abs=1e-6)
        assert point.lng == pytest.approx(-0.127806, abs=1e-6)

    @pytest.mark.asyncio
    async def test_dms_degrees_and_minutes_only(self):
        point = await resolve("51°30' 0°7'")
        assert point.lat == pytest.approx(51.5)
        assert point.lng == pytest.approx(7 / 60)

    @pytest.mark.asyncio
    async def test_grid_reference(self):
        point = await resolve("TQ 30163 80311")
        assert point.lat == pytest.approx(51.506748, abs=1e-5)
        assert point.lng == pytest.approx(-0.125892, abs=1e-5)

    @pytest.mark.asyncio
    async def test_out_of_range_decimal(self):
        assert await resolve("91, 0") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "ZZ99999999", "hello", "12"])
    async def test_unresolvable(self, text, mock_api):
        assert await resolve(text) is None
        assert mock_api.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_unknown_format_falls_back_to_parsers(self):
        point = await resolve("~51.5074 -0.1278 ~")
        assert point.lat == pytest.approx(51.5074)
        assert point.lng == pytest.approx(-0.1278)

    @pytest.mark.asyncio
    async def test_idempotent(self):
        text = "N51°30'26.4\" W0°07'40.1\""
        assert await resolve(text) == await resolve(text)


class TestResolveNetwork:
    @pytest.mark.asyncio
    async def test_postcode(self, postcode_route):
        postcode_route.mock(
            return_value=httpx.Response(
                200, json={"status": 200, "result": {"latitude": 51.50354, "longitude": -0.127695}}
            )
        )

        assert await resolve("SW1A 2AA") == GeoPoint(51.50354, -0.127695)
        assert postcode_route.call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_postcode(self, postcode_route):
        postcode_route.mock(return_value=httpx.Response(404, json={"status": 404, "error": "Invalid postcode"}))
        assert await resolve("ZZ9 9ZZ") is None

    @pytest.mark.asyncio
    async def test_what3words_without_key(self, w3w_route):
        assert await resolve("///filled.count.soap") is None
        assert w3w_route.call_count == 0

    @pytest.mark.asyncio
    async def test_what3words_with_key(self, w3w_route):
        w3w_route.mock(
            return_value=httpx.Response(200, json={"coordinates": {"lat": 51.520847, "lng": -0.195521}})
        )

        point = await resolve("filled.count.soap", w3w_api_key="TEST-KEY")

        assert point == GeoPoint(51.520847, -0.195521)


class TestResolveMany:
    @pytest.mark.asyncio
    async def test_order_and_formats(self, bulk_route, postcode_route):
        bulk_route.mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": 200,
                    "result": [
                        {"query": "SW1A 2AA", "result": {"latitude": 51.50354, "longitude": -0.127695}},
                        {"query": "XX1 1XX", "result": None},
                    ],
                },
            )
        )

        results = await resolve_many(["SW1A 2AA", "", "51.5, -0.1", "XX1 1XX", "  ", "???"])

        assert [r.input for r in results] == ["SW1A 2AA", "51.5, -0.1", "XX1 1XX", "???"]
        assert [r.format for r in results] == [
            DetectedFormat.POSTCODE,
            DetectedFormat.DECIMAL,
            DetectedFormat.POSTCODE,
            DetectedFormat.UNKNOWN,
        ]
        assert results[0].point == GeoPoint(51.50354, -0.127695)
        assert results[1].point == GeoPoint(51.5, -0.1)
        assert results[2].point is None
        assert results[3].point is None
        assert [r.resolved for r in results] == [True, True, False, False]

    @pytest.mark.asyncio
    async def test_postcodes_go_through_one_bulk_request(self, bulk_route, postcode_route):
        bulk_route.mock(return_value=httpx.Response(200, json={"status": 200, "result": []}))

        await resolve_many(["SW1A 2AA", "EC1A 1BB", "M1 1AE"])

        assert bulk_route.call_count == 1
        assert postcode_route.call_count == 0
        assert json.loads(bulk_route.calls.last.request.content) == {
            "postcodes": ["SW1A 2AA", "EC1A 1BB", "M1 1AE"]
        }

    @pytest.mark.asyncio
    async def test_no_postcodes_no_network(self, mock_api):
        results = await resolve_many(["51.5, -0.1", "TQ38"])

        assert all(r.resolved for r in results)
        assert mock_api.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_single_lookups_keep_their_own_timeout(self, bulk_route, w3w_route):
        bulk_route.mock(return_value=httpx.Response(200, json={"status": 200, "result": []}))
        w3w_route.mock(
            return_value=httpx.Response(200, json={"coordinates": {"lat": 51.520847, "lng": -0.195521}})
        )

        await resolve_many(["SW1A 2AA", "filled.count.soap"], w3w_api_key="TEST-KEY")

        assert w3w_route.calls.last.request.extensions["timeout"]["read"] == config.GEOCODER_TIMEOUT
        assert bulk_route.calls.last.request.extensions["timeout"]["read"] == config.GEOCODER_BULK_TIMEOUT

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await resolve_many([]) == []
