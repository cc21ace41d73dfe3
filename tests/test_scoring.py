"""
Unit tests for surface temperature estimation.

Tests the estimator in pawtemp.scoring: the heuristic composition, the
realistic bounds, risk classification, recommendations and the hourly helpers.
"""

import itertools
from types import MappingProxyType

import pytest

import config
from pawtemp.models import (
    RiskLevel,
    SurfaceCalculationFactors,
    SurfaceTemperatureResult,
    SurfaceType,
)
from pawtemp.scoring import (
    calculate_hourly_surface_temperatures,
    can_hold_hand_for_5_seconds,
    celsius_to_fahrenheit,
    classify_risk,
    estimate_all_surfaces,
    estimate_surface_temperature,
    fahrenheit_to_celsius,
    find_safe_walking_windows,
    get_recommendation,
    summarize_hourly_outlook,
    surface_multiplier,
    time_of_day_effect,
)


def make_factors(**overrides) -> SurfaceCalculationFactors:
    values = {
        "air_temp": 25.0,
        "humidity": 50.0,
        "wind_speed": 0.0,
        "uv_index": 0.0,
        "cloud_cover": 0.0,
        "surface_type": SurfaceType.ASPHALT,
        "time_of_day": 10,
    }
    values.update(overrides)
    return SurfaceCalculationFactors(**values)


def make_result(temp: float) -> SurfaceTemperatureResult:
    risk = classify_risk(temp)
    return SurfaceTemperatureResult(
        surface_temp=temp,
        surface_temp_f=celsius_to_fahrenheit(temp),
        is_safe_for_paws=risk is RiskLevel.SAFE,
        risk_level=risk,
        recommendation=get_recommendation(risk, SurfaceType.ASPHALT),
    )


class TestDocumentedScenarios:
    """Test the worked examples."""

    def test_hot_asphalt_afternoon(self):
        """30°C, full sun on asphalt at 15:00 is dangerous."""
        factors = make_factors(
            air_temp=30, humidity=50, wind_speed=0, uv_index=10,
            cloud_cover=0, surface_type=SurfaceType.ASPHALT, time_of_day=15,
        )
        result = estimate_surface_temperature(factors)

        assert result.surface_temp == pytest.approx(55.0)
        assert result.surface_temp_f == pytest.approx(131.0)
        assert result.risk_level is RiskLevel.DANGEROUS
        assert result.is_safe_for_paws is False

    def test_cool_grass_night_is_clamped(self):
        """Composed value of 8.6°C is raised to the air_temp - 5 floor."""
        factors = make_factors(
            air_temp=20, humidity=40, wind_speed=20, uv_index=2,
            cloud_cover=80, surface_type=SurfaceType.GRASS, time_of_day=3,
        )
        result = estimate_surface_temperature(factors)

        assert result.surface_temp == pytest.approx(15.0)
        assert result.surface_temp_f == pytest.approx(59.0)
        assert result.risk_level is RiskLevel.SAFE
        assert result.is_safe_for_paws is True

    def test_unknown_surface_defaults_to_neutral_multiplier(self):
        """Unknown surfaces are estimated with multiplier 1.0 and do not raise."""
        factors = make_factors(air_temp=20, wind_speed=10, surface_type="gravel")
        result = estimate_surface_temperature(factors)

        assert result.surface_temp == pytest.approx(17.0)
        assert "gravel" in result.recommendation

    def test_missing_surface_does_not_raise(self):
        factors = make_factors(air_temp=20, wind_speed=10, surface_type=None)
        result = estimate_surface_temperature(factors)

        assert result.surface_temp == pytest.approx(17.0)
        assert result.risk_level is RiskLevel.SAFE


class TestComposition:
    """Test individual heuristic terms."""

    def test_humidity_above_threshold_adds_heat(self):
        factors = make_factors(
            air_temp=20, humidity=100, wind_speed=10, surface_type=SurfaceType.CONCRETE,
        )
        assert estimate_surface_temperature(factors).surface_temp == pytest.approx(23.0)

    def test_humidity_at_threshold_adds_nothing(self):
        dry = estimate_surface_temperature(make_factors(humidity=0))
        at_threshold = estimate_surface_temperature(make_factors(humidity=70))

        assert dry.surface_temp == at_threshold.surface_temp

    def test_wind_cooling_saturates(self):
        breezy = estimate_surface_temperature(make_factors(wind_speed=10))
        gale = estimate_surface_temperature(make_factors(wind_speed=80))

        assert breezy.surface_temp == gale.surface_temp

    def test_full_cloud_cools_by_five(self):
        clear = estimate_surface_temperature(make_factors())
        overcast = estimate_surface_temperature(make_factors(cloud_cover=100))

        assert clear.surface_temp - overcast.surface_temp == pytest.approx(5.0)

    def test_upper_bound_clamp(self):
        """Metal in extreme sun is capped at air_temp + 30."""
        factors = make_factors(
            air_temp=40, uv_index=11, surface_type=SurfaceType.METAL, time_of_day=15,
        )
        result = estimate_surface_temperature(factors)

        assert result.surface_temp == pytest.approx(70.0)
        assert result.risk_level is RiskLevel.EXTREME

    def test_custom_multiplier_table(self):
        table = MappingProxyType({"asphalt": 1.0})
        result = estimate_surface_temperature(make_factors(air_temp=30), multipliers=table)

        assert result.surface_temp == pytest.approx(30.0)

    def test_fahrenheit_uses_unrounded_celsius(self):
        result = estimate_surface_temperature(make_factors(air_temp=31.37, uv_index=3.3))
        unrounded_c = 31.37 * 1.4 + 0.33 * 8

        assert result.surface_temp_f == pytest.approx(
            round(celsius_to_fahrenheit(unrounded_c), 1), abs=0.051
        )


class TestSurfaceMultiplier:
    """Test surface multiplier lookup."""

    @pytest.mark.parametrize("surface", list(SurfaceType))
    def test_every_surface_has_multiplier(self, surface):
        assert surface.value in config.SURFACE_MULTIPLIERS
        assert surface_multiplier(surface) == config.SURFACE_MULTIPLIERS[surface.value]

    def test_accepts_plain_strings(self):
        assert surface_multiplier("metal") == 1.5

    @pytest.mark.parametrize("surface", ["gravel", "", None, 42])
    def test_unknown_defaults(self, surface):
        assert surface_multiplier(surface) == 1.0

    def test_multiplier_table_is_read_only(self):
        with pytest.raises(TypeError):
            config.SURFACE_MULTIPLIERS["asphalt"] = 2.0


class TestTimeOfDayEffect:
    """Test the hour-of-day adjustment."""

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (12, 1.25),
            (13, 2.5),
            (14, 3.75),
            (15, 5.0),
            (16, 3.75),
            (0, -2.0),
            (7, -2.0),
            (20, -2.0),
            (23, -2.0),
            (8, 0.0),
            (11, 0.0),
            (17, 0.0),
            (19, 0.0),
        ],
    )
    def test_effect(self, hour, expected):
        assert time_of_day_effect(hour) == pytest.approx(expected)


class TestRiskClassification:
    """Test risk tier thresholds."""

    @pytest.mark.parametrize(
        "temp,expected",
        [
            (-10.0, RiskLevel.SAFE),
            (42.9, RiskLevel.SAFE),
            (43.0, RiskLevel.CAUTION),
            (48.9, RiskLevel.CAUTION),
            (49.0, RiskLevel.DANGEROUS),
            (59.9, RiskLevel.DANGEROUS),
            (60.0, RiskLevel.EXTREME),
            (95.0, RiskLevel.EXTREME),
        ],
    )
    def test_thresholds(self, temp, expected):
        assert classify_risk(temp) is expected

    def test_levels_are_ordered(self):
        ranks = [level.rank for level in RiskLevel]
        assert ranks == sorted(ranks)
        assert RiskLevel.EXTREME.rank > RiskLevel.SAFE.rank


class TestRecommendation:
    """Test recommendation text."""

    @pytest.mark.parametrize("risk", list(RiskLevel))
    def test_names_surface(self, risk):
        assert "sand" in get_recommendation(risk, SurfaceType.SAND)

    def test_messages_differ_per_level(self):
        messages = {get_recommendation(risk, "concrete") for risk in RiskLevel}
        assert len(messages) == len(RiskLevel)

    def test_extreme_message(self):
        message = get_recommendation(RiskLevel.EXTREME, SurfaceType.METAL)
        assert message.startswith("EXTREME DANGER! Do not walk on metal.")


class TestProperties:
    """Test invariants over a grid of inputs."""

    GRID = list(itertools.product(
        [-10, 0, 18, 35, 45],        # air_temp
        [0, 75, 100],                # humidity
        [0, 5, 30],                  # wind_speed
        [0, 6, 11],                  # uv_index
        [0, 50, 100],                # cloud_cover
        list(SurfaceType) + ["gravel"],
        [3, 10, 15, 21],             # hour
    ))

    def test_bounds_and_safety_consistency(self):
        for air, hum, wind, uv, cloud, surface, hour in self.GRID:
            factors = SurfaceCalculationFactors(air, hum, wind, uv, cloud, surface, hour)
            result = estimate_surface_temperature(factors)

            assert air - 5 <= result.surface_temp <= air + 30
            assert result.is_safe_for_paws == (result.risk_level is RiskLevel.SAFE)

    def test_monotonic_in_air_temperature(self):
        for surface in SurfaceType:
            temps = [
                estimate_surface_temperature(
                    make_factors(air_temp=air, surface_type=surface, uv_index=7, time_of_day=14)
                ).surface_temp
                for air in range(-20, 50)
            ]
            assert temps == sorted(temps)

    @pytest.mark.parametrize("value", [-40.0, 0.0, 21.7, 37.0, 100.0, 1234.5678])
    def test_conversion_round_trip(self, value):
        assert fahrenheit_to_celsius(celsius_to_fahrenheit(value)) == pytest.approx(value)

    def test_known_conversions(self):
        assert celsius_to_fahrenheit(100) == pytest.approx(212.0)
        assert fahrenheit_to_celsius(32) == pytest.approx(0.0)
        assert celsius_to_fahrenheit(-40) == pytest.approx(-40.0)


class TestHandTest:
    """Test the 5-second hand test."""

    def test_below_limit(self):
        assert can_hold_hand_for_5_seconds(49.9)

    def test_at_limit(self):
        assert not can_hold_hand_for_5_seconds(50.0)

    def test_independent_of_risk_tiers(self):
        """49.5°C is already dangerous but still passes the hand test."""
        assert classify_risk(49.5) is RiskLevel.DANGEROUS
        assert can_hold_hand_for_5_seconds(49.5)


class TestAllSurfaces:
    """Test estimate_all_surfaces."""

    def test_covers_every_surface(self):
        results = estimate_all_surfaces(make_factors(air_temp=30, uv_index=8, time_of_day=14))
        assert list(results) == [surface.value for surface in SurfaceType]

    def test_uses_custom_tables(self):
        """Custom multipliers and thresholds apply to every surface."""
        flat = MappingProxyType({surface.value: 1.0 for surface in SurfaceType})
        strict = MappingProxyType({"safe": 10, "caution": 20, "dangerous": 30})

        results = estimate_all_surfaces(make_factors(air_temp=25), multipliers=flat, thresholds=strict)

        assert {r.surface_temp for r in results.values()} == {25.0}
        assert all(r.risk_level is RiskLevel.DANGEROUS for r in results.values())

    def test_metal_hottest_grass_coolest(self):
        results = estimate_all_surfaces(make_factors(air_temp=30))
        temps = {name: r.surface_temp for name, r in results.items()}

        assert max(temps, key=temps.get) == "metal"
        assert min(temps, key=temps.get) == "grass"


class TestHourlyOutlook:
    """Test hourly estimates, safe windows and outlook summary."""

    def test_hourly_estimates(self):
        hourly_factors = [
            ("2024-07-01T08:00", make_factors(air_temp=22, time_of_day=8)),
            ("2024-07-01T15:00", make_factors(air_temp=35, uv_index=9, time_of_day=15)),
        ]
        hourly = calculate_hourly_surface_temperatures(hourly_factors)

        assert [h["timestamp"] for h in hourly] == ["2024-07-01T08:00", "2024-07-01T15:00"]
        assert hourly[0]["result"].is_safe_for_paws
        assert hourly[1]["result"].risk_level is RiskLevel.EXTREME

    def test_safe_windows(self):
        temps = [30, 35, 50, 55, 40, 41, 42]
        hourly = [
            {"timestamp": f"2024-07-01T{h:02d}:00", "result": make_result(t)}
            for h, t in zip(range(8, 15), temps)
        ]

        windows = find_safe_walking_windows(hourly)

        assert windows == [
            {"start": "2024-07-01T08:00", "end": "2024-07-01T09:00", "hours": 2},
            {"start": "2024-07-01T12:00", "end": "2024-07-01T14:00", "hours": 3},
        ]

    def test_no_safe_windows(self):
        hourly = [{"timestamp": "2024-07-01T15:00", "result": make_result(61)}]
        assert find_safe_walking_windows(hourly) == []

    def test_summary(self):
        temps = [30, 52, 44]
        hourly = [
            {"timestamp": f"2024-07-01T{h:02d}:00", "result": make_result(t)}
            for h, t in zip(range(12, 15), temps)
        ]

        summary = summarize_hourly_outlook(hourly)

        assert summary["peak_temp"] == pytest.approx(52.0)
        assert summary["peak_timestamp"] == "2024-07-01T13:00"
        assert summary["safe_hours"] == 1
        assert summary["total_hours"] == 3
        assert summary["worst_risk"] is RiskLevel.DANGEROUS

    def test_summary_empty(self):
        assert summarize_hourly_outlook([]) is None
