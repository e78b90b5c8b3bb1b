"""Current-location lookup via an IP geolocation endpoint."""

import logging

import httpx

logger = logging.getLogger(__name__)

GEO_URL = "https://ipapi.co/json/"


class GeolocationError(Exception):
    """Raised when the current location cannot be determined."""


class IpGeolocator:
    def __init__(self, url: str = GEO_URL, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout

    async def locate(self) -> tuple[float, float]:
        """Return (latitude, longitude) rounded to 2 decimal places."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise GeolocationError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise GeolocationError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise GeolocationError("Invalid location response") from e

        if not isinstance(data, dict):
            raise GeolocationError("Invalid location response")
        if data.get("error"):
            raise GeolocationError(str(data.get("reason") or "Location unavailable"))
        try:
            lat = float(data["latitude"])
            lon = float(data["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationError("Position unavailable") from e

        logger.info("Located at %.2f, %.2f", lat, lon)
        return round(lat, 2), round(lon, 2)
