"""Energy consumption estimate derived from weather conditions."""

from __future__ import annotations

import math

from ..const import BASE_HVAC_CONSUMPTION, DEFAULT_ENERGY_MODEL
from ..models import EnergyEstimate, EnergyModel, WeatherSnapshot


def _round1(value: float) -> float:
    # half-up
    return math.floor(value * 10 + 0.5) / 10


def estimate(
    temperature: float,
    humidity: float,
    cloud_cover: float,
    wind_speed: float,
    model: EnergyModel = DEFAULT_ENERGY_MODEL,
) -> EnergyEstimate:
    """Estimate HVAC and lighting consumption for one timestep.

    Args:
        temperature: Air temperature in °C
        humidity: Relative humidity in %
        cloud_cover: Cloud cover in %
        wind_speed: Wind speed in km/h
        model: Coefficients of the estimate

    Returns:
        hvac, lighting and total in kWh per hour, each rounded to 0.1
    """
    hvac = BASE_HVAC_CONSUMPTION + abs(temperature - model.optimal_temperature) * model.temperature_impact_factor

    if humidity < model.humidity_threshold_min or humidity > model.humidity_threshold_max:
        hvac += model.humidity_impact

    if wind_speed > model.wind_speed_threshold:
        hvac -= model.wind_ventilation_bonus

    lighting = (cloud_cover / 100) * model.max_lighting_consumption

    return EnergyEstimate(
        hvac=_round1(hvac),
        lighting=_round1(lighting),
        total=_round1(hvac + lighting),
    )


def estimate_snapshot(snapshot: WeatherSnapshot, model: EnergyModel = DEFAULT_ENERGY_MODEL) -> EnergyEstimate:
    return estimate(snapshot.temperature, snapshot.humidity, snapshot.cloud_cover, snapshot.wind_speed, model)
