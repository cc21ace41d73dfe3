"""Configuration constants for the Paw Safety Surface Temperature checker."""

from types import MappingProxyType

# Surface type multipliers applied to air temperature
SURFACE_MULTIPLIERS = MappingProxyType({
    "asphalt": 1.4,   # Hottest common surface
    "concrete": 1.2,
    "metal": 1.5,     # Can get extremely hot
    "sand": 1.1,
    "grass": 0.8,     # Coolest surface
})
DEFAULT_SURFACE_MULTIPLIER = 1.0
DEFAULT_SURFACE_TYPE = "asphalt"

# Paw safety thresholds (°C), exclusive upper bounds
PAW_SAFETY_THRESHOLDS = MappingProxyType({
    "safe": 43,       # Below 43°C (109°F)
    "caution": 49,    # 43-49°C (109-120°F)
    "dangerous": 60,  # 49-60°C (120-140°F), extreme at or above
})

# "5-second rule": hand can rest on the surface below this temperature (°C)
HAND_TEST_MAX_TEMP = 50  # ~122°F

# Heuristic coefficients
UV_MAX_EFFECT = 8.0          # °C added at UV index 10
UV_REFERENCE_INDEX = 10.0
CLOUD_MAX_EFFECT = -5.0      # °C at 100% cloud cover
WIND_MAX_EFFECT = -3.0       # °C once wind reaches WIND_SATURATION_KMH
WIND_SATURATION_KMH = 10.0
HUMIDITY_THRESHOLD = 70      # %
HUMIDITY_MAX_EFFECT = 2.0    # °C at 100% humidity

# Time of day effect
PEAK_HEAT_START_HOUR = 12
PEAK_HEAT_END_HOUR = 16
PEAK_HEAT_HOUR = 15
PEAK_HEAT_EFFECT = 5.0       # °C at PEAK_HEAT_HOUR
PEAK_HEAT_DECAY = 1.25       # °C lost per hour away from the peak
COOL_MORNING_END_HOUR = 7
COOL_EVENING_START_HOUR = 20
COOL_HOURS_EFFECT = -2.0

# Realistic bounds relative to air temperature
MAX_BELOW_AIR_TEMP = 5
MAX_ABOVE_AIR_TEMP = 30

# Open-Meteo API configuration
OPEN_METEO_BASE_URL = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
WEATHER_PARAMS = [
    "temperature_2m",
    "relative_humidity_2m",
    "wind_speed_10m",
    "cloud_cover",
    "uv_index",
]
REQUEST_TIMEOUT = 10  # seconds
RETRY_ATTEMPTS = 3
RETRY_DELAY = 1.0     # seconds
FORECAST_HOURS = 12

# Preset locations checked when none is given on the command line
DEFAULT_LOCATIONS = {
    "Phoenix": {"lat": 33.4484, "lon": -112.0740, "description": "Downtown Phoenix, AZ"},
    "Austin": {"lat": 30.2672, "lon": -97.7431, "description": "Zilker Park, TX"},
    "Las Vegas": {"lat": 36.1699, "lon": -115.1398, "description": "The Strip, NV"},
}

# Output configuration
OUTPUT_DIR = "output"
OUTPUT_MAP_FILENAME = "paw_safety_map.html"

# Map visualization
MAP_ZOOM_START = 5
RISK_COLORS = MappingProxyType({
    "safe": "#2ecc71",       # Green
    "caution": "#f1c40f",    # Yellow
    "dangerous": "#e67e22",  # Orange
    "extreme": "#e74c3c",    # Red
})
