"""Current weather from Open-Meteo.

Only three numbers are used: temperature, relative humidity and the WMO
weather code, which :func:`condition_for` buckets into a label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .errors import WeatherError

logger = logging.getLogger(__name__)

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    name: str


DEFAULT_LOCATION = Location(51.5074, -0.1278, "London, UK")


@dataclass
class WeatherReport:
    temperature: int
    humidity: float
    weather_code: int
    conditions: str
    location: str


# (low, high, label), inclusive
_CONDITION_BUCKETS = (
    (0, 0, "Clear"),
    (1, 3, "Partly Cloudy"),
    (4, 49, "Foggy"),
    (50, 69, "Rainy"),
    (70, 79, "Snowy"),
    (80, 99, "Stormy"),
)


def condition_for(code: int) -> str:
    for low, high, label in _CONDITION_BUCKETS:
        if low <= code <= high:
            return label
    return "Unknown"


class WeatherClient:

    def __init__(self, *, session=None, timeout: float = 5.0) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def fetch(self, location: Location = DEFAULT_LOCATION) -> WeatherReport:
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": "temperature_2m,relative_humidity_2m,weather_code",
            "timezone": "auto",
        }
        try:
            response = self._session.get(FORECAST_URL, params=params, timeout=self._timeout)
            response.raise_for_status()
            current = response.json()["current"]
            code = int(current["weather_code"])
            report = WeatherReport(
                temperature=round(current["temperature_2m"]),
                humidity=current["relative_humidity_2m"],
                weather_code=code,
                conditions=condition_for(code),
                location=location.name,
            )
        except requests.RequestException as exc:
            raise WeatherError(f"Unable to fetch weather data: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise WeatherError(f"Unexpected weather payload: {exc}") from exc

        logger.debug("Weather for %s: %s", location.name, report)
        return report
