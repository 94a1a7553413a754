"""buienradar.nl weather feed HTTP client."""

import logging
import xml.etree.ElementTree as ET

import httpx

from ..errors import FetchError, ParseError
from ..schemas import StationRecord

logger = logging.getLogger(__name__)

# buienradar reports unavailable readings as a dash
MISSING_VALUE = "-"

ROOT_TAG = "buienradarnl"
STATIONS_PATH = "weergegevens/actueel_weer/weerstations/weerstation"

# StationRecord field -> feed element
READING_ELEMENTS: dict[str, str] = {
    "humidity": "luchtvochtigheid",
    "temperature_ground": "temperatuurGC",
    "temperature_10cm": "temperatuur10cm",
    "wind_speed": "windsnelheidMS",
    "gust_speed": "windstotenMS",
    "air_pressure": "luchtdruk",
    "sight_range": "zichtmeters",
    "rain": "regenMMPU",
}


def normalize_value(value: str | None) -> str | None:
    """Map missing elements, empty text and the dash sentinel to None."""
    if value is None:
        return None
    value = value.strip()
    if not value or value == MISSING_VALUE:
        return None
    return value


class BuienradarClient:
    """HTTP client for the buienradar.nl XML feed of current station readings."""

    def __init__(
        self,
        feed_url: str = "https://data.buienradar.nl/1.0/feed/xml",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.feed_url = feed_url
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

    async def get_stations(self) -> list[StationRecord]:
        """Fetch the feed and return every station in it.

        Raises:
            FetchError: The feed could not be retrieved.
            ParseError: The feed is not a buienradar.nl XML document.
        """
        try:
            response = await self.http_client.get(self.feed_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"could not communicate with the `buienradar.nl` domain: {e}") from e

        return self._parse_feed(response.content)

    def _parse_feed(self, content: bytes) -> list[StationRecord]:
        """Parse the XML feed into station records."""
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ParseError(f"could not parse the buienradar.nl response: {e}") from e

        if root.tag != ROOT_TAG:
            raise ParseError(f"unexpected root element <{root.tag}> in buienradar.nl response")

        stations = [self._parse_station(element) for element in root.iterfind(STATIONS_PATH)]
        logger.debug("Parsed %d stations from buienradar.nl feed", len(stations))
        return stations

    def _parse_station(self, element: ET.Element) -> StationRecord:
        name_element = element.find("stationnaam")
        region = ""
        name = None
        if name_element is not None:
            region = name_element.get("regio", "")
            name = normalize_value(name_element.text)

        readings = {
            field: normalize_value(element.findtext(tag))
            for field, tag in READING_ELEMENTS.items()
        }

        return StationRecord(
            code=normalize_value(element.findtext("stationcode")),
            name=name,
            region=region,
            **readings,
        )
