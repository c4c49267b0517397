"""Weather view: forecast payload annotated with energy estimates.

The forecast provider returns ``current``, ``hourly`` and ``daily`` objects
whose array fields are parallel-indexed by time. This module validates that
shape, normalises the field names and attaches an energy estimate to the
current reading and to each of the next 24 hours.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping

from ..const import DEFAULT_ENERGY_MODEL, HOURLY_WINDOW, UNKNOWN_CONDITION, WEATHER_CODES
from ..core.exceptions import MalformedUpstreamDataError
from ..models import EnergyModel, WeatherCondition, WeatherView
from .energy import estimate

_LOGGER = logging.getLogger(__name__)

# provider field -> view field
CURRENT_FIELDS = {
    "temperature_2m": "temperature",
    "apparent_temperature": "feels_like",
    "relative_humidity_2m": "humidity",
    "wind_speed_10m": "wind_speed",
    "wind_direction_10m": "wind_direction",
    "precipitation": "precipitation",
    "pressure_msl": "pressure",
    "cloud_cover": "cloud_cover",
    "visibility": "visibility",
    "uv_index": "uv_index",
    "is_day": "is_day",
}

HOURLY_FIELDS = {
    "time": "time",
    "temperature_2m": "temperature",
    "precipitation": "precipitation",
    "precipitation_probability": "precipitation_probability",
    "weather_code": "weather_codes",
    "cloud_cover": "cloud_cover",
    "visibility": "visibility",
    "uv_index": "uv_index",
    "wind_speed_10m": "wind_speed",
    "wind_direction_10m": "wind_direction",
    "relative_humidity_2m": "humidity",
    "dew_point_2m": "dew_point",
    "shortwave_radiation": "solar_radiation",
    "direct_radiation": "direct_radiation",
}

DAILY_FIELDS = {
    "time": "time",
    "temperature_2m_max": "temperature_max",
    "temperature_2m_min": "temperature_min",
    "precipitation_sum": "precipitation_sum",
    "precipitation_probability_max": "precipitation_probability",
    "wind_speed_10m_max": "wind_speed_max",
    "wind_gusts_10m_max": "wind_gusts_max",
    "uv_index_max": "uv_index_max",
    "sunrise": "sunrise",
    "sunset": "sunset",
    "daylight_duration": "daylight_duration",
    "sunshine_duration": "sunshine_duration",
    "weather_code": "weather_codes",
}

ENERGY_INPUTS = ("temperature_2m", "relative_humidity_2m", "cloud_cover", "wind_speed_10m")


def describe_weather_code(code: Any) -> WeatherCondition:
    """Look up a WMO weather code, falling back to the unknown condition."""
    try:
        return WEATHER_CODES.get(int(code), UNKNOWN_CONDITION)
    except (TypeError, ValueError):
        return UNKNOWN_CONDITION


def _section(payload: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = payload.get(name) if isinstance(payload, Mapping) else None
    if not isinstance(section, Mapping):
        raise MalformedUpstreamDataError(f"Forecast payload has no '{name}' object", field=name)
    return section


def _number(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise MalformedUpstreamDataError(f"Forecast field '{field}' is not a number: {value!r}", field=field)
    return float(value)


def _array(section: Mapping[str, Any], prefix: str, key: str, min_length: int) -> List[Any]:
    field = f"{prefix}.{key}"
    values = section.get(key)
    if not isinstance(values, list):
        raise MalformedUpstreamDataError(f"Forecast field '{field}' is missing or not an array", field=field)
    if len(values) < min_length:
        raise MalformedUpstreamDataError(
            f"Forecast field '{field}' has {len(values)} entries, expected at least {min_length}",
            field=field,
        )
    return values


def _build_current(current: Mapping[str, Any], model: EnergyModel):
    inputs = {key: _number(current.get(key), f"current.{key}") for key in ENERGY_INPUTS}
    record: Dict[str, Any] = {view: current.get(provider) for provider, view in CURRENT_FIELDS.items()}
    record.update({CURRENT_FIELDS[key]: value for key, value in inputs.items()})

    code = current.get("weather_code")
    condition = describe_weather_code(code)
    record["weather_description"] = condition.description
    record["weather_icon"] = condition.icon
    record["weather_code"] = code

    energy = estimate(
        inputs["temperature_2m"],
        inputs["relative_humidity_2m"],
        inputs["cloud_cover"],
        inputs["wind_speed_10m"],
        model,
    )
    return record, energy


def _build_hourly(hourly: Mapping[str, Any], model: EnergyModel):
    arrays = {key: _array(hourly, "hourly", key, HOURLY_WINDOW)[:HOURLY_WINDOW] for key in HOURLY_FIELDS}

    forecast: List[Dict[str, Any]] = []
    for i in range(HOURLY_WINDOW):
        temperature, humidity, cloud_cover, wind_speed = (
            _number(arrays[key][i], f"hourly.{key}[{i}]") for key in ENERGY_INPUTS
        )
        forecast.append({
            "time": arrays["time"][i],
            "consumption": estimate(temperature, humidity, cloud_cover, wind_speed, model),
        })

    view = {HOURLY_FIELDS[key]: values for key, values in arrays.items()}
    return view, forecast


def _build_daily(daily: Mapping[str, Any]) -> Dict[str, List[Any]]:
    times = _array(daily, "daily", "time", 1)
    view: Dict[str, List[Any]] = {}
    for key, name in DAILY_FIELDS.items():
        values = _array(daily, "daily", key, len(times))
        if len(values) != len(times):
            raise MalformedUpstreamDataError(
                f"Forecast field 'daily.{key}' has {len(values)} entries, expected {len(times)}",
                field=f"daily.{key}",
            )
        view[name] = values
    return view


def build_weather_view(payload: Mapping[str, Any], model: EnergyModel = DEFAULT_ENERGY_MODEL) -> WeatherView:
    """Build the weather view from a forecast payload.

    Args:
        payload: Decoded forecast provider response
        model: Energy model used for every estimate

    Returns:
        Current, 24-hour and daily weather with energy estimates

    Raises:
        MalformedUpstreamDataError: If a section or array is missing, too
            short, or holds a non-numeric energy input
    """
    current, current_energy = _build_current(_section(payload, "current"), model)
    hourly, forecast_24h = _build_hourly(_section(payload, "hourly"), model)
    daily = _build_daily(_section(payload, "daily"))

    if _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug(
            "Weather view: %s, current energy %.1f kWh, %d daily slots",
            current["weather_description"], current_energy.total, len(daily["time"]),
        )

    return WeatherView(
        current=current,
        current_energy=current_energy,
        forecast_24h=forecast_24h,
        hourly=hourly,
        daily=daily,
    )
