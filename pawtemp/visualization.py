"""Visualization module for generating interactive Folium maps."""

from pathlib import Path
from typing import Optional

import folium

import config
from .models import RiskLevel
from .scoring import can_hold_hand_for_5_seconds, summarize_hourly_outlook
from .utils import format_location, format_temperature


def risk_to_color(risk_level: RiskLevel) -> str:
    """Convert a risk level to its marker color."""
    return config.RISK_COLORS.get(getattr(risk_level, "value", risk_level), "#999999")


def create_surface_map(
    location_results: dict,
    output_path: Optional[str] = None,
    unit: str = "fahrenheit",
) -> str:
    """
    Create an interactive map with a paw safety marker for each location.

    Args:
        location_results: Dict mapping location names to dicts with keys:
            lat, lon, description, weather, surface_type, result
            (SurfaceTemperatureResult), surfaces (surface name -> result),
            and optionally hourly and windows.
        output_path: Where to save the HTML file.
        unit: 'celsius' or 'fahrenheit' for the headline temperatures.

    Returns:
        Path to the generated HTML file.
    """
    if output_path is None:
        output_dir = Path(config.OUTPUT_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = str(output_dir / config.OUTPUT_MAP_FILENAME)

    lats = [loc["lat"] for loc in location_results.values()]
    lons = [loc["lon"] for loc in location_results.values()]
    center = [sum(lats) / len(lats), sum(lons) / len(lons)] if lats else [0, 0]

    m = folium.Map(
        location=center,
        zoom_start=config.MAP_ZOOM_START,
        tiles="OpenStreetMap",
    )

    for name, loc in location_results.items():
        _add_location_marker(m, name, loc, unit)

    _add_risk_legend(m)

    m.save(output_path)
    print(f"Map saved to: {output_path}")

    return output_path


def _add_location_marker(m: folium.Map, name: str, loc: dict, unit: str) -> None:
    """Add a risk-colored marker with a detail card for a location."""
    result = loc["result"]
    color = risk_to_color(result.risk_level)
    headline = _headline_temperature(result, unit)

    popup_html = f"""
    <div style="min-width: 300px;">
        <h3 style="margin: 0 0 5px 0;">{name}</h3>
        <p style="margin: 0 0 10px 0; color: #666; font-style: italic;">
            {loc.get('description', '')} ({format_location(loc['lat'], loc['lon'])})
        </p>
        {_format_result_html(result, loc.get('surface_type'), unit)}
        {_format_weather_html(loc.get('weather'))}
        {_format_surfaces_table(loc.get('surfaces', {}))}
        {_format_hourly_html(loc.get('hourly'), loc.get('windows'))}
    </div>
    """

    icon = folium.DivIcon(
        html=f"""
        <div style="background: {color}; color: white; border-radius: 5px; padding: 3px 6px;
                    font-size: 12px; font-weight: bold; white-space: nowrap;
                    box-shadow: 0 2px 5px rgba(0,0,0,0.3);">
            {headline}
        </div>
        """,
        icon_size=(70, 24),
        icon_anchor=(35, 12),
    )

    folium.Marker(
        location=[loc["lat"], loc["lon"]],
        popup=folium.Popup(popup_html, max_width=400),
        tooltip=f"{name} - {result.risk_level.value.title()}",
        icon=icon,
    ).add_to(m)


def _headline_temperature(result, unit: str) -> str:
    if unit == "celsius":
        return format_temperature(result.surface_temp, "celsius")
    return format_temperature(result.surface_temp_f, "fahrenheit")


def _format_result_html(result, surface_type, unit: str) -> str:
    """Format the selected surface verdict as HTML."""
    surface = getattr(surface_type, "value", surface_type) or "surface"
    hand_test = "Yes" if can_hold_hand_for_5_seconds(result.surface_temp) else "No"

    return f"""
    <div style="background: {risk_to_color(result.risk_level)}; color: white; padding: 8px;
                border-radius: 5px; margin-bottom: 10px;">
        <b>{str(surface).title()}: {_headline_temperature(result, unit)}</b>
        ({format_temperature(result.surface_temp, 'celsius')} /
        {format_temperature(result.surface_temp_f, 'fahrenheit')})<br>
        <b>{result.risk_level.value.upper()}</b><br>
        <span style="font-size: 12px;">{result.recommendation}</span><br>
        <span style="font-size: 11px;">5-second hand test passes: {hand_test}</span>
    </div>
    """


def _format_weather_html(weather: Optional[dict]) -> str:
    """Format weather data as HTML."""
    if not weather:
        return "<p><i>Weather data unavailable</i></p>"

    return f"""
    <div style="background: #f5f5f5; padding: 8px; border-radius: 5px; margin-bottom: 10px;">
        <b>Current Conditions:</b><br>
        <span style="font-size: 12px;">
            Air: <b>{weather.get('temperature', 0):.1f}°C</b> |
            Humidity: <b>{weather.get('humidity', 0):.0f}%</b><br>
            Wind: <b>{weather.get('wind_speed', 0):.1f} km/h</b> |
            UV: <b>{weather.get('uv_index', 0):.1f}</b> |
            Cloud: <b>{weather.get('cloud_cover', 0):.0f}%</b>
        </span>
    </div>
    """


def _format_surfaces_table(surfaces: dict) -> str:
    """Format per-surface results as an HTML table."""
    if not surfaces:
        return ""

    rows = []
    for surface, result in surfaces.items():
        rows.append(f"""
            <tr>
                <td style="font-weight: bold;">{surface.title()}</td>
                <td style="text-align: center;">{result.surface_temp:.1f}°C</td>
                <td style="text-align: center;">{result.surface_temp_f:.1f}°F</td>
                <td style="background: {risk_to_color(result.risk_level)}; text-align: center;">
                    {result.risk_level.value}
                </td>
            </tr>
        """)

    return f"""
    <table style="width: 100%; border-collapse: collapse; font-size: 11px; margin-bottom: 10px;">
        <tr style="background: #ddd;">
            <th style="padding: 3px;">Surface</th>
            <th style="padding: 3px;">°C</th>
            <th style="padding: 3px;">°F</th>
            <th style="padding: 3px;">Risk</th>
        </tr>
        {''.join(rows)}
    </table>
    """


def _format_hourly_html(hourly: Optional[list], windows: Optional[list]) -> str:
    """Format the hourly outlook and safe walking windows as HTML."""
    outlook = summarize_hourly_outlook(hourly or [])
    if outlook is None:
        return ""

    if windows:
        window_items = "".join(
            f"<li>{_short_time(w['start'])} - {_short_time(w['end'])} ({w['hours']}h)</li>"
            for w in windows
        )
        windows_html = f"<ul style='margin: 2px 0; padding-left: 18px;'>{window_items}</ul>"
    else:
        windows_html = "<i>No safe hours in the forecast</i>"

    return f"""
    <div style="font-size: 12px;">
        <b>Next {outlook['total_hours']} hours:</b>
        peak {outlook['peak_temp']:.1f}°C at {_short_time(outlook['peak_timestamp'])},
        {outlook['safe_hours']} safe hours<br>
        <b>Safe walking windows:</b>
        {windows_html}
    </div>
    """


def _short_time(timestamp: str) -> str:
    return timestamp.split("T")[1] if "T" in timestamp else timestamp


def _add_risk_legend(m: folium.Map) -> None:
    """Add a legend explaining risk colors."""
    items = "".join(
        f'<i style="background: {config.RISK_COLORS[level.value]}; width: 18px; height: 18px; '
        f'display: inline-block;"></i> {level.value.title()}<br>'
        for level in RiskLevel
    )
    legend_html = f"""
    <div style="
        position: fixed;
        bottom: 50px;
        left: 50px;
        z-index: 1000;
        background-color: white;
        padding: 10px;
        border: 2px solid grey;
        border-radius: 5px;
        font-size: 12px;
    ">
        <b>Paw Risk</b><br>
        {items}
        <span style="color: #666;">Safe &lt; 43°C, Caution &lt; 49°C, Dangerous &lt; 60°C</span>
    </div>
    """
    m.get_root().html.add_child(folium.Element(legend_html))
