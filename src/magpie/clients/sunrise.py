"""sunrise-sunset.org HTTP client."""

import logging

import httpx
from pydantic import ValidationError

from ..errors import FetchError, ParseError
from ..schemas import DaylightWindow, SunriseSunsetResponse

logger = logging.getLogger(__name__)


class SunriseSunsetClient:
    """HTTP client for fetching today's sunrise and sunset times."""

    def __init__(
        self,
        base_url: str = "https://api.sunrise-sunset.org",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(follow_redirects=True)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def build_url(self, latitude: float, longitude: float) -> str:
        return (
            f"{self.base_url}/json?lat={latitude:f}&lng={longitude:f}"
            "&date=today&formatted=0"
        )

    async def get_daylight_window(self, latitude: float, longitude: float) -> DaylightWindow:
        """Fetch today's daylight window for a location.

        Raises:
            FetchError: The API could not be reached or answered with an error status.
            ParseError: The response body is not a valid sunrise-sunset.org document.
        """
        url = self.build_url(latitude, longitude)

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(
                f"could not communicate with the `api.sunrise-sunset.org` domain: {e}"
            ) from e

        return self._parse_response(response.content)

    def _parse_response(self, content: bytes) -> DaylightWindow:
        """Parse the JSON body into a DaylightWindow."""
        try:
            document = SunriseSunsetResponse.model_validate_json(content)
        except ValidationError as e:
            raise ParseError(f"could not parse the sunrise-sunset.org response: {e}") from e

        if document.status != "OK":
            raise ParseError(f"sunrise-sunset.org returned status {document.status!r}")

        logger.debug(
            "Daylight window: sunrise=%s sunset=%s",
            document.results.sunrise.isoformat(),
            document.results.sunset.isoformat(),
        )
        return document.results
