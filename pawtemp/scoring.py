"""Surface temperature estimation and paw safety risk classification."""

import math
from dataclasses import replace
from typing import Mapping, Optional

import numpy as np

import config
from .models import (
    RiskLevel,
    SurfaceCalculationFactors,
    SurfaceTemperatureResult,
    SurfaceType,
)


RECOMMENDATION_TEMPLATES = {
    RiskLevel.SAFE: (
        "Safe for walking! The {surface} temperature is comfortable for your dog's paws."
    ),
    RiskLevel.CAUTION: (
        "Use caution when walking on {surface}. Consider dog booties or limit "
        "time on hot surfaces."
    ),
    RiskLevel.DANGEROUS: (
        "Dangerous! Avoid walking on {surface}. The surface can burn your dog's "
        "paws. Seek shaded areas or wait for cooler temperatures."
    ),
    RiskLevel.EXTREME: (
        "EXTREME DANGER! Do not walk on {surface}. The surface will burn paw pads "
        "in seconds. Stay indoors or find grassy areas only."
    ),
}


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def can_hold_hand_for_5_seconds(temp_celsius: float) -> bool:
    """
    The '5-second rule': can you rest the back of your hand on the surface?

    Independent of the risk tiers, so a surface can pass this test while
    already classified as dangerous.
    """
    return temp_celsius < config.HAND_TEST_MAX_TEMP


def _round_1dp(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def _surface_name(surface_type) -> str:
    if surface_type is None:
        return "this surface"
    return str(getattr(surface_type, "value", surface_type))


def surface_multiplier(
    surface_type,
    multipliers: Mapping[str, float] = config.SURFACE_MULTIPLIERS,
) -> float:
    """Multiplier for a surface type, or the default for unknown surfaces."""
    key = getattr(surface_type, "value", surface_type)
    if not isinstance(key, str):
        return config.DEFAULT_SURFACE_MULTIPLIER
    return multipliers.get(key, config.DEFAULT_SURFACE_MULTIPLIER)


def time_of_day_effect(hour: float) -> float:
    """
    Temperature adjustment in °C for the hour of day.

    - Peak heat between 12:00 and 16:00, up to +5°C at 15:00.
    - Early morning (<= 07:00) and evening (>= 20:00) are 2°C cooler.
    - No effect otherwise.
    """
    if config.PEAK_HEAT_START_HOUR <= hour <= config.PEAK_HEAT_END_HOUR:
        peak_distance = abs(hour - config.PEAK_HEAT_HOUR)
        return max(0.0, config.PEAK_HEAT_EFFECT - peak_distance * config.PEAK_HEAT_DECAY)

    if hour <= config.COOL_MORNING_END_HOUR or hour >= config.COOL_EVENING_START_HOUR:
        return config.COOL_HOURS_EFFECT

    return 0.0


def classify_risk(
    temp_celsius: float,
    thresholds: Mapping[str, float] = config.PAW_SAFETY_THRESHOLDS,
) -> RiskLevel:
    """Map a surface temperature to a risk tier using strict upper bounds."""
    if temp_celsius < thresholds["safe"]:
        return RiskLevel.SAFE
    elif temp_celsius < thresholds["caution"]:
        return RiskLevel.CAUTION
    elif temp_celsius < thresholds["dangerous"]:
        return RiskLevel.DANGEROUS
    return RiskLevel.EXTREME


def get_recommendation(risk_level: RiskLevel, surface_type) -> str:
    return RECOMMENDATION_TEMPLATES[risk_level].format(surface=_surface_name(surface_type))


def _compose_surface_temperature(
    factors: SurfaceCalculationFactors,
    multipliers: Mapping[str, float],
) -> float:
    """Unrounded, clamped surface temperature in °C."""
    air_temp = factors.air_temp

    temp = air_temp * surface_multiplier(factors.surface_type, multipliers)

    # More UV = hotter surface
    temp += (factors.uv_index / config.UV_REFERENCE_INDEX) * config.UV_MAX_EFFECT

    # More cloud = cooler surface
    temp += (factors.cloud_cover / 100) * config.CLOUD_MAX_EFFECT

    # Wind cooling saturates at WIND_SATURATION_KMH
    temp += min(factors.wind_speed / config.WIND_SATURATION_KMH, 1) * config.WIND_MAX_EFFECT

    # Only high humidity adds heat
    if factors.humidity > config.HUMIDITY_THRESHOLD:
        temp += (
            (factors.humidity - config.HUMIDITY_THRESHOLD)
            / (100 - config.HUMIDITY_THRESHOLD)
            * config.HUMIDITY_MAX_EFFECT
        )

    temp += time_of_day_effect(factors.time_of_day)

    return float(np.clip(
        temp,
        air_temp - config.MAX_BELOW_AIR_TEMP,
        air_temp + config.MAX_ABOVE_AIR_TEMP,
    ))


def estimate_surface_temperature(
    factors: SurfaceCalculationFactors,
    multipliers: Mapping[str, float] = config.SURFACE_MULTIPLIERS,
    thresholds: Mapping[str, float] = config.PAW_SAFETY_THRESHOLDS,
) -> SurfaceTemperatureResult:
    """
    Estimate surface temperature and paw safety for the given conditions.

    The estimate is a linear heuristic: air temperature scaled by the surface
    multiplier, adjusted for UV, cloud, wind, humidity and time of day, then
    bounded to [air_temp - 5, air_temp + 30].

    Fahrenheit is converted from the unrounded Celsius value, and both are
    rounded half-up to one decimal independently.

    Args:
        factors: Weather and surface inputs
        multipliers: Surface name -> multiplier table
        thresholds: Risk tier upper bounds in °C

    Returns:
        SurfaceTemperatureResult for the inputs.
    """
    surface_temp = _compose_surface_temperature(factors, multipliers)
    risk_level = classify_risk(surface_temp, thresholds)

    return SurfaceTemperatureResult(
        surface_temp=_round_1dp(surface_temp),
        surface_temp_f=_round_1dp(celsius_to_fahrenheit(surface_temp)),
        is_safe_for_paws=risk_level is RiskLevel.SAFE,
        risk_level=risk_level,
        recommendation=get_recommendation(risk_level, factors.surface_type),
    )


def estimate_all_surfaces(
    factors: SurfaceCalculationFactors,
    multipliers: Mapping[str, float] = config.SURFACE_MULTIPLIERS,
    thresholds: Mapping[str, float] = config.PAW_SAFETY_THRESHOLDS,
) -> dict:
    """
    Estimate every known surface under the same weather.

    Args:
        factors: Weather inputs; the surface type is replaced for each surface
        multipliers: Surface name -> multiplier table
        thresholds: Risk tier upper bounds in °C

    Returns:
        Dict mapping surface name to SurfaceTemperatureResult, in SurfaceType order.
    """
    results = {}
    for surface in SurfaceType:
        results[surface.value] = estimate_surface_temperature(
            replace(factors, surface_type=surface), multipliers, thresholds
        )
    return results


def calculate_hourly_surface_temperatures(hourly_factors: list) -> list:
    """
    Estimate surface temperature for each hour of a forecast.

    Args:
        hourly_factors: List of (timestamp, SurfaceCalculationFactors) pairs

    Returns:
        List of dicts with 'timestamp', 'factors' and 'result' keys.
    """
    return [
        {
            "timestamp": timestamp,
            "factors": factors,
            "result": estimate_surface_temperature(factors),
        }
        for timestamp, factors in hourly_factors
    ]


def find_safe_walking_windows(hourly_results: list) -> list:
    """
    Find contiguous runs of hours that are safe for paws.

    Args:
        hourly_results: Output of calculate_hourly_surface_temperatures

    Returns:
        List of {'start', 'end', 'hours'} dicts; 'end' is the last safe hour.
    """
    windows = []
    current = None

    for entry in hourly_results:
        if entry["result"].is_safe_for_paws:
            if current is None:
                current = {"start": entry["timestamp"], "end": entry["timestamp"], "hours": 0}
            current["end"] = entry["timestamp"]
            current["hours"] += 1
        elif current is not None:
            windows.append(current)
            current = None

    if current is not None:
        windows.append(current)

    return windows


def summarize_hourly_outlook(hourly_results: list) -> Optional[dict]:
    """Peak temperature, its time, safe hour count and worst risk of a forecast."""
    if not hourly_results:
        return None

    temps = np.array([entry["result"].surface_temp for entry in hourly_results])
    peak_idx = int(np.argmax(temps))
    worst = max(
        (entry["result"].risk_level for entry in hourly_results),
        key=lambda level: level.rank,
    )

    return {
        "peak_temp": float(temps[peak_idx]),
        "peak_temp_f": hourly_results[peak_idx]["result"].surface_temp_f,
        "peak_timestamp": hourly_results[peak_idx]["timestamp"],
        "safe_hours": sum(1 for entry in hourly_results if entry["result"].is_safe_for_paws),
        "total_hours": len(hourly_results),
        "worst_risk": worst,
    }
