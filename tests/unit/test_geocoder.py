"""Unit tests for the Nominatim geocoder."""

import httpx
import pytest

from app.core.exceptions import GeocodingFailedException
from app.infrastructure.geocoder import NominatimGeocoder


def make_geocoder(handler):
    return NominatimGeocoder(
        base_url="https://nominatim.test",
        email="ops@example.gn",
        user_agent="SoudouTests/1.0",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=[
            {"display_name": "Kipé, Ratoma, Conakry", "lat": "9.6012", "lon": "-13.6521"},
        ])

    results = await make_geocoder(handler).search("Kipé", limit=3)

    assert len(results) == 1
    assert results[0].display_name == "Kipé, Ratoma, Conakry"
    assert results[0].latitude == pytest.approx(9.6012)
    assert results[0].longitude == pytest.approx(-13.6521)

    request = seen["request"]
    assert request.url.path == "/search"
    assert request.url.params["format"] == "jsonv2"
    assert request.url.params["limit"] == "3"
    assert request.url.params["email"] == "ops@example.gn"
    assert request.headers["User-Agent"] == "SoudouTests/1.0"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_reverse_without_match():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "Unable to geocode"})

    assert await make_geocoder(handler).reverse(0.0, 0.0) is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_reverse():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["lat"] == "9.5"
        return httpx.Response(200, json={"display_name": "Kaloum", "lat": "9.5", "lon": "-13.7"})

    result = await make_geocoder(handler).reverse(9.5, -13.7)

    assert result.display_name == "Kaloum"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(GeocodingFailedException) as exc_info:
        await make_geocoder(handler).search("Conakry")

    assert exc_info.value.status_code == 502
