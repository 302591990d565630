from __future__ import annotations

import logging
import math
from typing import Any

import httpx
from pydantic import BaseModel

from .config import DEFAULT_WEATHER_CONFIG, WeatherConfig

logger = logging.getLogger(__name__)

# OpenWeatherMap "weather[0].main" groups.
WEATHER_CONDITIONS = frozenset({
    "Thunderstorm", "Drizzle", "Rain", "Snow", "Clear", "Clouds",
    "Mist", "Smoke", "Haze", "Dust", "Fog", "Sand", "Ash", "Squall", "Tornado",
})

DUMMY_TEMP = 22.0
DUMMY_CONDITION = "Clear"


class WeatherReport(BaseModel):
    temp: float
    condition: str
    is_dummy: bool = False


def dummy_report() -> WeatherReport:
    return WeatherReport(temp=DUMMY_TEMP, condition=DUMMY_CONDITION, is_dummy=True)


def _parse_coordinate(value: Any, limit: float) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


def _parse_payload(data: dict[str, Any]) -> WeatherReport:
    temp = float(data["main"]["temp"])
    weather = data.get("weather") or [{}]
    condition = weather[0].get("main") or DUMMY_CONDITION
    if condition not in WEATHER_CONDITIONS:
        logger.info("Unknown weather condition %r, using %s", condition, DUMMY_CONDITION)
        condition = DUMMY_CONDITION
    return WeatherReport(temp=temp, condition=condition, is_dummy=False)


def fetch_weather(
    lat: Any,
    lon: Any,
    config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
) -> WeatherReport:
    """
    Fetch current weather from OpenWeatherMap.

    Returns the dummy report (22°C, Clear) on missing or out-of-range
    coordinates, missing credentials, or any upstream failure.
    """
    latitude = _parse_coordinate(lat, 90.0)
    longitude = _parse_coordinate(lon, 180.0)
    if latitude is None or longitude is None:
        logger.info("Weather: invalid coordinates (lat=%r, lon=%r), returning dummy data", lat, lon)
        return dummy_report()

    if not config.enabled or not config.api_key:
        logger.info("Weather: no API key configured, returning dummy data")
        return dummy_report()

    try:
        with httpx.Client(timeout=config.timeout) as client:
            response = client.get(
                f"{config.base_url}/weather",
                params={
                    "lat": latitude,
                    "lon": longitude,
                    "appid": config.api_key,
                    "units": "metric",
                },
            )
            response.raise_for_status()
            return _parse_payload(response.json())

    except Exception:
        logger.warning("Weather fetch failed, falling back to dummy data", exc_info=True)
        return dummy_report()
