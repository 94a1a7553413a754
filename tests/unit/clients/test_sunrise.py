"""Unit tests for sunrise-sunset.org client."""

from datetime import datetime, timezone

import httpx
import pytest
import respx

from magpie.clients.sunrise import SunriseSunsetClient
from magpie.errors import FetchError, ParseError

API_URL = (
    "https://api.sunrise-sunset.org/json?lat=52.370000&lng=4.890000&date=today&formatted=0"
)


@pytest.fixture
def sunrise_client() -> SunriseSunsetClient:
    """sunrise-sunset.org client for testing."""
    return SunriseSunsetClient(base_url="https://api.sunrise-sunset.org")


class TestBuildUrl:
    def test_query_parameters(self, sunrise_client: SunriseSunsetClient):
        url = sunrise_client.build_url(52.37, 4.89)

        assert url == (
            "https://api.sunrise-sunset.org/json?lat=52.370000&lng=4.890000"
            "&date=today&formatted=0"
        )

    def test_trailing_slash_in_base_url(self):
        client = SunriseSunsetClient(base_url="https://api.sunrise-sunset.org/")
        assert client.build_url(0, 0).startswith("https://api.sunrise-sunset.org/json?")


class TestParseResponse:
    def test_parse_valid_response(self, sunrise_client: SunriseSunsetClient, sunrise_sunset_body: bytes):
        window = sunrise_client._parse_response(sunrise_sunset_body)

        assert window.sunrise == datetime(2024, 7, 15, 3, 39, 44, tzinfo=timezone.utc)
        assert window.sunset == datetime(2024, 7, 15, 19, 54, 3, tzinfo=timezone.utc)

    def test_parse_invalid_json(self, sunrise_client: SunriseSunsetClient):
        with pytest.raises(ParseError):
            sunrise_client._parse_response(b"<html>gateway timeout</html>")

    def test_parse_missing_results(self, sunrise_client: SunriseSunsetClient):
        with pytest.raises(ParseError):
            sunrise_client._parse_response(b'{"status": "OK"}')

    def test_parse_error_status(self, sunrise_client: SunriseSunsetClient):
        body = (
            b'{"status": "INVALID_REQUEST", "results": {'
            b'"sunrise": "2024-07-15T03:39:44+00:00", "sunset": "2024-07-15T19:54:03+00:00"}}'
        )

        with pytest.raises(ParseError) as exc_info:
            sunrise_client._parse_response(body)

        assert "INVALID_REQUEST" in str(exc_info.value)


class TestHTTPRequests:
    @respx.mock
    @pytest.mark.asyncio
    async def test_get_daylight_window(
        self, sunrise_client: SunriseSunsetClient, sunrise_sunset_body: bytes
    ):
        """Test fetching the daylight window via HTTP."""
        route = respx.get(API_URL).mock(
            return_value=httpx.Response(200, content=sunrise_sunset_body)
        )

        window = await sunrise_client.get_daylight_window(52.37, 4.89)

        assert route.called
        request = route.calls.last.request
        assert request.url.params["lat"] == "52.370000"
        assert request.url.params["lng"] == "4.890000"
        assert request.url.params["date"] == "today"
        assert request.url.params["formatted"] == "0"
        assert window.sunrise.hour == 3

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_status(self, sunrise_client: SunriseSunsetClient):
        respx.get(API_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(FetchError):
            await sunrise_client.get_daylight_window(52.37, 4.89)

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self, sunrise_client: SunriseSunsetClient):
        respx.get(API_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(FetchError) as exc_info:
            await sunrise_client.get_daylight_window(52.37, 4.89)

        assert "api.sunrise-sunset.org" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_client_close(self):
        client = SunriseSunsetClient()

        # Access http_client to initialize it
        _ = client.http_client

        await client.close()
        assert client._http_client is None
