"""Weather data fetching module using Open-Meteo API."""

import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import requests

import config
from .models import SurfaceCalculationFactors, SurfaceType
from .utils import get_current_time_of_day, parse_timestamp_hour

# Weather dict keys that must be present to build calculation factors
REQUIRED_FIELDS = ["temperature", "humidity", "wind_speed", "uv_index", "cloud_cover"]


class WeatherDataError(ValueError):
    """Raised when weather data cannot be turned into calculation factors."""


def fetch_current_conditions(
    lat: float,
    lon: float,
    max_retries: int = config.RETRY_ATTEMPTS,
    retry_delay: float = config.RETRY_DELAY,
) -> Optional[dict]:
    """
    Fetch current weather conditions from Open-Meteo.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        max_retries: Number of retry attempts on failure.
        retry_delay: Seconds to wait between retries.

    Returns:
        Weather dict containing:
        - temperature: Air temperature in °C
        - humidity: Relative humidity in %
        - wind_speed: Wind speed in km/h
        - uv_index: UV index
        - cloud_cover: Cloud cover in %
        - timestamp: Local ISO format timestamp
        or None if every attempt failed.
    """
    params = {
        "latitude": lat,
        "longitude": lon,
        "current": ",".join(config.WEATHER_PARAMS),
        "wind_speed_unit": "kmh",
        "timezone": "auto",
    }

    data = _get_json(config.OPEN_METEO_BASE_URL, params, "current weather", max_retries, retry_delay)
    if data is None:
        return None
    return _parse_current_response(data)


def fetch_hourly_forecast(
    lat: float,
    lon: float,
    forecast_days: int = 1,
    max_retries: int = config.RETRY_ATTEMPTS,
    retry_delay: float = config.RETRY_DELAY,
) -> Optional[list]:
    """
    Fetch an hourly forecast from Open-Meteo.

    Returns:
        List of weather dicts (same keys as fetch_current_conditions), one per
        hour, or None if every attempt failed.
    """
    params = {
        "latitude": lat,
        "longitude": lon,
        "hourly": ",".join(config.WEATHER_PARAMS),
        "forecast_days": forecast_days,
        "wind_speed_unit": "kmh",
        "timezone": "auto",
    }

    data = _get_json(config.OPEN_METEO_BASE_URL, params, "hourly forecast", max_retries, retry_delay)
    if data is None:
        return None
    return _parse_hourly_response(data)


def geocode_location(
    query: str,
    count: int = 1,
    max_retries: int = config.RETRY_ATTEMPTS,
    retry_delay: float = config.RETRY_DELAY,
) -> Optional[dict]:
    """
    Look up a place name or postal code with the Open-Meteo geocoding API.

    Returns:
        Dict with name, lat, lon and country of the best match, or None.
    """
    params = {
        "name": query.strip(),
        "count": count,
        "language": "en",
        "format": "json",
    }

    data = _get_json(config.OPEN_METEO_GEOCODING_URL, params, f"location '{query}'", max_retries, retry_delay)
    if not data or not data.get("results"):
        print(f"No location found for '{query}'")
        return None

    match = data["results"][0]
    return {
        "name": match.get("name", query),
        "lat": match["latitude"],
        "lon": match["longitude"],
        "country": match.get("country", ""),
    }


def _get_json(
    url: str,
    params: dict,
    label: str,
    max_retries: int,
    retry_delay: float,
) -> Optional[dict]:
    """GET a JSON document with retries."""
    for attempt in range(max_retries):
        try:
            response = requests.get(url, params=params, timeout=config.REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.json()

        except requests.RequestException as e:
            print(f"Fetch failed for {label} (attempt {attempt + 1}): {e}")
            if attempt < max_retries - 1:
                time.sleep(retry_delay)

    print(f"Failed to fetch {label} after {max_retries} attempts")
    return None


def _parse_current_response(data: dict) -> dict:
    """Parse Open-Meteo current response into standardized format."""
    current = data.get("current", {})

    return {
        "temperature": current.get("temperature_2m"),
        "humidity": current.get("relative_humidity_2m"),
        "wind_speed": current.get("wind_speed_10m"),
        "uv_index": current.get("uv_index"),
        "cloud_cover": current.get("cloud_cover"),
        "timestamp": current.get("time") or _location_now(data),
    }


def _location_now(data: dict) -> str:
    """Current local time at the forecast location, from its UTC offset."""
    offset = timedelta(seconds=data.get("utc_offset_seconds") or 0)
    return (datetime.now(timezone.utc) + offset).strftime("%Y-%m-%dT%H:%M")


def _parse_hourly_response(data: dict) -> list:
    """Parse Open-Meteo hourly response into a list of weather dicts."""
    hourly = data.get("hourly", {})

    times = hourly.get("time", [])
    series = {
        "temperature": hourly.get("temperature_2m", []),
        "humidity": hourly.get("relative_humidity_2m", []),
        "wind_speed": hourly.get("wind_speed_10m", []),
        "uv_index": hourly.get("uv_index", []),
        "cloud_cover": hourly.get("cloud_cover", []),
    }

    def safe_val(lst, idx):
        return lst[idx] if idx < len(lst) else None

    weather_data = []
    for i, timestamp in enumerate(times):
        weather = {key: safe_val(values, i) for key, values in series.items()}
        weather["timestamp"] = timestamp
        weather_data.append(weather)

    return weather_data


def build_calculation_factors(
    weather: dict,
    surface_type=config.DEFAULT_SURFACE_TYPE,
    hour: Optional[int] = None,
) -> SurfaceCalculationFactors:
    """
    Validate a weather dict into SurfaceCalculationFactors.

    Args:
        weather: Weather dict from fetch_current_conditions or fetch_hourly_forecast
        surface_type: Surface name or SurfaceType
        hour: Local hour; defaults to the weather timestamp's hour, then the current hour

    Raises:
        WeatherDataError: If a required field is missing or not numeric.
    """
    values = {}
    for field in REQUIRED_FIELDS:
        value = weather.get(field)
        if value is None or isinstance(value, bool):
            raise WeatherDataError(f"Weather data is missing '{field}'")
        try:
            values[field] = float(value)
        except (TypeError, ValueError):
            raise WeatherDataError(f"Weather field '{field}' is not numeric: {value!r}")

    if hour is None:
        hour = parse_timestamp_hour(weather.get("timestamp"))
    if hour is None:
        hour = get_current_time_of_day()

    return SurfaceCalculationFactors(
        air_temp=values["temperature"],
        humidity=values["humidity"],
        wind_speed=values["wind_speed"],
        uv_index=values["uv_index"],
        cloud_cover=values["cloud_cover"],
        surface_type=SurfaceType.from_value(surface_type),
        time_of_day=hour,
    )


def get_weather_summary(weather: dict) -> str:
    """Generate a text summary of weather conditions."""
    lines = [
        f"  Temperature: {weather['temperature']:.1f}°C",
        f"  Humidity: {weather['humidity']:.0f}%",
        f"  Wind: {weather['wind_speed']:.1f} km/h",
        f"  UV index: {weather['uv_index']:.1f}",
        f"  Cloud cover: {weather['cloud_cover']:.0f}%",
    ]
    return "\n".join(lines)
