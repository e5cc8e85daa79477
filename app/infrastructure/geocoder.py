"""OpenStreetMap Nominatim geocoding client."""

from typing import List, Optional

import httpx
import structlog

from app.config import get_settings
from app.core.exceptions import GeocodingFailedException
from app.domain.schemas.media import GeocodeResult

settings = get_settings()
logger = structlog.get_logger(__name__)


class NominatimGeocoder:
    """Address <-> coordinate resolution. Failures surface immediately, no retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        email: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.NOMINATIM_URL).rstrip("/")
        self.email = email if email is not None else settings.NOMINATIM_EMAIL
        # Nominatim's usage policy requires an identifying User-Agent
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.timeout = timeout
        self.transport = transport

    async def _get(self, path: str, params: dict):
        params = {**params, "format": "jsonv2"}
        if self.email:
            params["email"] = self.email
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}{path}",
                    params=params,
                    headers={"User-Agent": self.user_agent},
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Nominatim error", path=path, status_code=e.response.status_code)
            raise GeocodingFailedException() from e
        except httpx.HTTPError as e:
            logger.error("Nominatim connection error", path=path, error=str(e))
            raise GeocodingFailedException() from e

    async def search(self, query: str, limit: int = 5) -> List[GeocodeResult]:
        rows = await self._get("/search", {"q": query, "limit": limit})
        return [_to_result(row) for row in rows]

    async def reverse(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        row = await self._get("/reverse", {"lat": latitude, "lon": longitude})
        if not row or "error" in row:
            return None
        return _to_result(row)


def _to_result(row: dict) -> GeocodeResult:
    return GeocodeResult(
        display_name=row.get("display_name", ""),
        latitude=float(row["lat"]),
        longitude=float(row["lon"]),
    )
