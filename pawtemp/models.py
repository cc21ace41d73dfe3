"""Typed inputs and outputs for surface temperature estimation."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SurfaceType(str, Enum):
    """Ground materials with a known heat-absorption multiplier."""

    ASPHALT = "asphalt"
    CONCRETE = "concrete"
    GRASS = "grass"
    SAND = "sand"
    METAL = "metal"

    @classmethod
    def from_value(cls, value) -> Union["SurfaceType", str]:
        """Return the matching SurfaceType, or the value unchanged if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return value


class RiskLevel(str, Enum):
    """Paw burn risk tiers, ordered from coolest to hottest."""

    SAFE = "safe"
    CAUTION = "caution"
    DANGEROUS = "dangerous"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)


@dataclass(frozen=True)
class SurfaceCalculationFactors:
    """
    Weather and surface inputs for a single estimate.

    Attributes:
        air_temp: Air temperature in °C
        humidity: Relative humidity in %
        wind_speed: Wind speed in km/h
        uv_index: UV index (0-11+)
        cloud_cover: Cloud cover in %
        surface_type: Surface being walked on. Values outside SurfaceType are
            accepted and estimated with the default multiplier.
        time_of_day: Local hour (0-23)
    """

    air_temp: float
    humidity: float
    wind_speed: float
    uv_index: float
    cloud_cover: float
    surface_type: Union[SurfaceType, str, None]
    time_of_day: int


@dataclass(frozen=True)
class SurfaceTemperatureResult:
    """Estimated surface temperature and paw safety verdict."""

    surface_temp: float
    surface_temp_f: float
    is_safe_for_paws: bool
    risk_level: RiskLevel
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "surface_temp": self.surface_temp,
            "surface_temp_f": self.surface_temp_f,
            "is_safe_for_paws": self.is_safe_for_paws,
            "risk_level": self.risk_level.value,
            "recommendation": self.recommendation,
        }
