"""Paw Safety Surface Temperature checker - Source package."""

from .models import RiskLevel, SurfaceCalculationFactors, SurfaceTemperatureResult, SurfaceType
from .scoring import (
    can_hold_hand_for_5_seconds,
    celsius_to_fahrenheit,
    classify_risk,
    estimate_surface_temperature,
    fahrenheit_to_celsius,
)
from .weather import fetch_current_conditions, fetch_hourly_forecast
from .visualization import create_surface_map

__all__ = [
    "RiskLevel",
    "SurfaceCalculationFactors",
    "SurfaceTemperatureResult",
    "SurfaceType",
    "can_hold_hand_for_5_seconds",
    "celsius_to_fahrenheit",
    "classify_risk",
    "estimate_surface_temperature",
    "fahrenheit_to_celsius",
    "fetch_current_conditions",
    "fetch_hourly_forecast",
    "create_surface_map",
]
