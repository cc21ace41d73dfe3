#!/usr/bin/env python3
"""
Paw Safety Surface Temperature Checker - Main Entry Point

Estimates how hot the ground is from current weather and warns whether it is
safe to walk a dog on it. Checks every surface type, finds safe walking
windows in the hourly forecast, and renders the results on a map.
"""

import argparse
from datetime import datetime
from typing import Optional

import config
from pawtemp.models import SurfaceType
from pawtemp.scoring import (
    calculate_hourly_surface_temperatures,
    can_hold_hand_for_5_seconds,
    estimate_all_surfaces,
    estimate_surface_temperature,
    find_safe_walking_windows,
)
from pawtemp.utils import (
    format_temperature,
    is_valid_coordinates,
    truncate_to_hour,
    validate_zip_code,
)
from pawtemp.visualization import create_surface_map
from pawtemp.weather import (
    WeatherDataError,
    build_calculation_factors,
    fetch_current_conditions,
    fetch_hourly_forecast,
    geocode_location,
    get_weather_summary,
)


def main(argv=None):
    """Main entry point for the paw safety checker."""
    args = parse_args(argv)

    locations = resolve_locations(args)
    if not locations:
        return 1

    print("=" * 60)
    print("Paw Safety Surface Temperature Checker")
    print(f"Surface: {args.surface}")
    print(f"Analysis time: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print("=" * 60)

    print("\n[1/3] Fetching current weather and hourly forecast...")
    location_results = {}

    for name, loc in locations.items():
        print(f"  Processing {name}...")
        weather = fetch_current_conditions(loc["lat"], loc["lon"])
        if weather is None:
            continue

        try:
            factors = build_calculation_factors(weather, args.surface)
        except WeatherDataError as e:
            print(f"  Skipping {name}: {e}")
            continue

        hourly = _hourly_results(loc, args.surface, args.hours, weather.get("timestamp"))

        location_results[name] = {
            "lat": loc["lat"],
            "lon": loc["lon"],
            "description": loc.get("description", ""),
            "weather": weather,
            "surface_type": factors.surface_type,
            "result": estimate_surface_temperature(factors),
            "surfaces": estimate_all_surfaces(factors),
            "hourly": hourly,
            "windows": find_safe_walking_windows(hourly),
        }

    if not location_results:
        print("ERROR: Failed to fetch weather data. Check internet connection.")
        return 1

    print("\n[2/3] Estimating surface temperatures...")
    for name, data in location_results.items():
        print_location_report(name, data, args.unit)

    if args.no_map:
        return 0

    print("\n[3/3] Generating paw safety map...")
    output_path = create_surface_map(location_results, args.output, unit=args.unit)
    print(f"\nMap saved to: {output_path}")

    return 0


def _hourly_results(loc: dict, surface: str, hours: int, local_now: Optional[str]) -> list:
    """
    Estimate the next `hours` forecast hours, skipping incomplete ones.

    Forecast timestamps are in the location's local time, so the cutoff is the
    location's current time (from its current conditions), not the machine clock.
    """
    forecast = fetch_hourly_forecast(loc["lat"], loc["lon"], forecast_days=2)
    if not forecast:
        return []

    cutoff = truncate_to_hour(local_now)
    if cutoff is not None:
        forecast = [w for w in forecast if w["timestamp"] >= cutoff]
    upcoming = forecast[:hours]

    hourly_factors = []
    for weather in upcoming:
        try:
            hourly_factors.append((weather["timestamp"], build_calculation_factors(weather, surface)))
        except WeatherDataError:
            continue

    return calculate_hourly_surface_temperatures(hourly_factors)


def print_location_report(name: str, data: dict, unit: str) -> None:
    """Print the current verdict, other surfaces and safe windows for a location."""
    result = data["result"]
    temp = result.surface_temp if unit == "celsius" else result.surface_temp_f

    print("\n" + "-" * 60)
    print(f"{name} ({data['description']})")
    print(get_weather_summary(data["weather"]))
    print(f"\n  {str(getattr(data['surface_type'], 'value', data['surface_type'])).title()}: "
          f"{format_temperature(temp, unit)} - {result.risk_level.value.upper()}")
    print(f"  {result.recommendation}")
    hand_test = "passes" if can_hold_hand_for_5_seconds(result.surface_temp) else "fails"
    print(f"  5-second hand test {hand_test}")

    print("\n  All surfaces:")
    for surface, surface_result in data["surfaces"].items():
        surface_temp = surface_result.surface_temp if unit == "celsius" else surface_result.surface_temp_f
        print(f"    {surface:<10} {format_temperature(surface_temp, unit):>9}  {surface_result.risk_level.value}")

    if data["hourly"]:
        print(f"\n  Safe walking windows (next {len(data['hourly'])} hours):")
        if data["windows"]:
            for window in data["windows"]:
                print(f"    {window['start']} to {window['end']} ({window['hours']}h)")
        else:
            print("    None")


def resolve_locations(args) -> dict:
    """Turn location arguments into a name -> {lat, lon, description} dict."""
    if args.lat is not None or args.lon is not None:
        if args.lat is None or args.lon is None:
            print("ERROR: --lat and --lon must be given together")
            return {}
        if not is_valid_coordinates(args.lat, args.lon):
            print(f"ERROR: Invalid coordinates {args.lat}, {args.lon}")
            return {}
        return {"Custom location": {"lat": args.lat, "lon": args.lon, "description": "Given coordinates"}}

    if args.location:
        query = args.location.strip()
        if validate_zip_code(query):
            query = query[:5]  # Geocoder matches on the 5-digit code
        elif query.replace("-", "").isdigit():
            print(f"ERROR: Invalid ZIP code '{query}'")
            return {}
        match = geocode_location(query)
        if match is None:
            return {}
        return {match["name"]: {"lat": match["lat"], "lon": match["lon"], "description": match["country"]}}

    return config.DEFAULT_LOCATIONS


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Check whether the ground is too hot for your dog's paws"
    )
    parser.add_argument("--lat", type=float, default=None, help="Latitude of the location")
    parser.add_argument("--lon", type=float, default=None, help="Longitude of the location")
    parser.add_argument(
        "--location",
        type=str,
        default=None,
        help="Place name or US ZIP code to look up",
    )
    parser.add_argument(
        "--surface",
        type=str,
        choices=[s.value for s in SurfaceType],
        default=config.DEFAULT_SURFACE_TYPE,
        help="Surface your dog will walk on",
    )
    parser.add_argument(
        "--unit",
        type=str,
        choices=["celsius", "fahrenheit"],
        default="fahrenheit",
        help="Temperature unit for display",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=config.FORECAST_HOURS,
        help="Number of forecast hours to scan for safe walking windows",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output path for the paw safety map HTML file",
    )
    parser.add_argument("--no-map", action="store_true", help="Skip generating the map")
    return parser.parse_args(argv)


if __name__ == "__main__":
    exit(main())
