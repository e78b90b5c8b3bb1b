"""7Timer civil light forecast API client."""

import logging

import httpx

logger = logging.getLogger(__name__)

SEVENTIMER_URL = "https://www.7timer.info/bin/api.pl"
DEFAULT_USER_AGENT = "cityforecast/0.1.0"


class ForecastUnavailableError(Exception):
    """Raised when the forecast API fails or returns no usable dataseries."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SevenTimerClient:
    def __init__(
        self,
        base_url: str = SEVENTIMER_URL,
        product: str = "civillight",
        output: str = "json",
        timeout: float = 5.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url
        self.product = product
        self.output = output
        self.timeout = timeout
        self.user_agent = user_agent

    async def get_dataseries(self, lat: float | str, lon: float | str) -> list[dict]:
        """Fetch the daily dataseries for a coordinate pair.

        Single request, no retry. Raises ForecastUnavailableError on a
        non-success status, a transport failure, or an empty body.
        """
        params = {
            "lon": str(lon),
            "lat": str(lat),
            "product": self.product,
            "output": self.output,
        }
        headers = {"User-Agent": self.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=headers) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            logger.error("7Timer request failed for lat=%s lon=%s: %s", lat, lon, e)
            raise ForecastUnavailableError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise ForecastUnavailableError(
                f"HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ForecastUnavailableError("No dataseries returned") from e

        series = data.get("dataseries") if isinstance(data, dict) else None
        if not isinstance(series, list) or not series:
            raise ForecastUnavailableError("No dataseries returned")
        return series
