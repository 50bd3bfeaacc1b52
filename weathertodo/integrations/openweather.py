"""OpenWeather integration for weathertodo."""

import logging
from typing import Optional
import requests

from weathertodo.errors import WeatherLookupError

logger = logging.getLogger(__name__)

OPENWEATHER_API_BASE = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_UNITS = "metric"
DEFAULT_TIMEOUT_SEC = 10.0

INCOMPLETE_WEATHER_MESSAGE = "Incomplete weather data received."

# Wind speed unit reported by the API for each unit preference
WIND_SPEED_UNITS = {"metric": "m/s", "standard": "m/s", "imperial": "mph"}


class OpenWeatherClient:
    """Client for the OpenWeather current-weather endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_API_BASE,
        units: str = DEFAULT_UNITS,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ):
        """Initialize OpenWeather client.

        Args:
            api_key: OpenWeather API key
            base_url: Current-weather endpoint URL
            units: Unit preference passed to the API ('metric', 'imperial', 'standard')
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ValueError("OpenWeather API key is required. Set OPENWEATHER_API_KEY env var.")
        self.api_key = api_key
        self.base_url = base_url
        self.units = units
        self.timeout = timeout

    def get_weather(self, city: str) -> str:
        """Fetch a human-readable weather description for a city.

        Args:
            city: City name used as the lookup key

        Returns:
            Formatted weather description, or a fallback message when the
            provider answers with an error status or an unusable body

        Raises:
            WeatherLookupError: If the provider cannot be reached
        """
        params = {"q": city, "appid": self.api_key, "units": self.units}

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Weather request for {city!r} failed: {type(e).__name__}: {e}")
            raise WeatherLookupError(f"Failed to reach weather provider for {city}") from e

        if not response.ok:
            logger.warning(f"Weather provider returned {response.status_code} for {city!r}")
            return f"Unable to retrieve weather data for {city}. Error: {response.reason}"

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Weather provider returned a non-JSON body for {city!r}")
            return INCOMPLETE_WEATHER_MESSAGE

        return self.format_weather(payload)

    def format_weather(self, payload: dict) -> str:
        """Format the provider's JSON payload into a description string."""
        description = _first_weather_description(payload)
        wind = payload.get("wind") if isinstance(payload, dict) else None
        wind_speed = wind.get("speed") if isinstance(wind, dict) else None
        city_name = payload.get("name") if isinstance(payload, dict) else None

        if description is None or wind_speed is None or city_name is None:
            return INCOMPLETE_WEATHER_MESSAGE

        speed_unit = WIND_SPEED_UNITS.get(self.units, "m/s")
        return f"Description: {description}, Wind Speed: {wind_speed} {speed_unit}, City: {city_name}"


def _first_weather_description(payload: dict) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    weather = payload.get("weather")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        return None
    return weather[0].get("description")
