"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import voluptuous as vol

from .const import (
    DEFAULT_AIR_QUALITY_TIMEOUT,
    DEFAULT_API_BASE,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TIMEZONE,
    DEFAULT_TOKEN_VALIDITY,
    DEFAULT_WEATHER_TIMEOUT,
)
from .core.exceptions import ConfigError
from .models import EnergyModel

_LOGGER = logging.getLogger(__name__)

CONF_API_BASE = "api_base"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_TOKEN_VALIDITY = "token_validity_seconds"
CONF_REQUEST_TIMEOUT = "request_timeout"
CONF_LATITUDE = "latitude"
CONF_LONGITUDE = "longitude"
CONF_TIMEZONE = "timezone"
CONF_WEATHER_TIMEOUT = "weather_timeout"
CONF_AIR_QUALITY_TIMEOUT = "air_quality_timeout"
CONF_ENERGY_MODEL = "energy_model"

# Environment variable -> settings key
ENV_MAP = {
    "IZIT_API_BASE": CONF_API_BASE,
    "IZIT_USERNAME": CONF_USERNAME,
    "IZIT_PASSWORD": CONF_PASSWORD,
    "IZIT_TOKEN_VALIDITY": CONF_TOKEN_VALIDITY,
    "IZIT_REQUEST_TIMEOUT": CONF_REQUEST_TIMEOUT,
    "WEATHER_LATITUDE": CONF_LATITUDE,
    "WEATHER_LONGITUDE": CONF_LONGITUDE,
    "WEATHER_TIMEZONE": CONF_TIMEZONE,
}

_POSITIVE = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

ENERGY_MODEL_SCHEMA = vol.Schema(
    {
        vol.Optional("optimal_temperature"): vol.Coerce(float),
        vol.Optional("temperature_impact_factor"): vol.Coerce(float),
        vol.Optional("humidity_threshold_min"): vol.All(vol.Coerce(float), vol.Range(min=0, max=100)),
        vol.Optional("humidity_threshold_max"): vol.All(vol.Coerce(float), vol.Range(min=0, max=100)),
        vol.Optional("humidity_impact"): vol.Coerce(float),
        vol.Optional("max_lighting_consumption"): vol.Coerce(float),
        vol.Optional("wind_speed_threshold"): vol.Coerce(float),
        vol.Optional("wind_ventilation_bonus"): vol.Coerce(float),
    }
)

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_API_BASE, default=DEFAULT_API_BASE): vol.All(str, vol.Length(min=1)),
        vol.Required(CONF_USERNAME): vol.All(str, vol.Length(min=1)),
        vol.Required(CONF_PASSWORD): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_TOKEN_VALIDITY, default=DEFAULT_TOKEN_VALIDITY): _POSITIVE,
        vol.Optional(CONF_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT): _POSITIVE,
        vol.Optional(CONF_LATITUDE, default=DEFAULT_LATITUDE): vol.All(
            vol.Coerce(float), vol.Range(min=-90, max=90)
        ),
        vol.Optional(CONF_LONGITUDE, default=DEFAULT_LONGITUDE): vol.All(
            vol.Coerce(float), vol.Range(min=-180, max=180)
        ),
        vol.Optional(CONF_TIMEZONE, default=DEFAULT_TIMEZONE): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_WEATHER_TIMEOUT, default=DEFAULT_WEATHER_TIMEOUT): _POSITIVE,
        vol.Optional(CONF_AIR_QUALITY_TIMEOUT, default=DEFAULT_AIR_QUALITY_TIMEOUT): _POSITIVE,
        vol.Optional(CONF_ENERGY_MODEL, default=dict): ENERGY_MODEL_SCHEMA,
    }
)


@dataclass(frozen=True)
class Settings:
    """Validated runtime settings."""

    username: str
    password: str = field(repr=False)
    api_base: str = DEFAULT_API_BASE
    token_validity_seconds: float = DEFAULT_TOKEN_VALIDITY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    timezone: str = DEFAULT_TIMEZONE
    weather_timeout: float = DEFAULT_WEATHER_TIMEOUT
    air_quality_timeout: float = DEFAULT_AIR_QUALITY_TIMEOUT
    energy_model: EnergyModel = field(default_factory=EnergyModel)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Validate a raw mapping and build settings.

        Args:
            data: Raw configuration values

        Returns:
            Validated settings

        Raises:
            ConfigError: If a value is missing or invalid
        """
        try:
            validated: Dict[str, Any] = SETTINGS_SCHEMA(dict(data))
        except vol.Invalid as err:
            key = str(err.path[0]) if err.path else None
            _LOGGER.error(f"Invalid configuration for '{key}': {err.msg}")
            raise ConfigError(f"Invalid configuration for '{key}': {err.msg}", key=key) from err

        model_data = validated.pop(CONF_ENERGY_MODEL)
        energy_model = EnergyModel.from_mapping(model_data)
        if energy_model.humidity_threshold_min > energy_model.humidity_threshold_max:
            raise ConfigError(
                "humidity_threshold_min must not exceed humidity_threshold_max",
                key=CONF_ENERGY_MODEL,
            )
        validated[CONF_API_BASE] = validated[CONF_API_BASE].rstrip("/")
        return cls(energy_model=energy_model, **validated)


def load_settings(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> Settings:
    """Load settings from environment variables, then apply overrides."""
    env = os.environ if env is None else env
    raw: Dict[str, Any] = {}
    for env_key, conf_key in ENV_MAP.items():
        value = env.get(env_key)
        if value not in (None, ""):
            raw[conf_key] = value
    raw.update(overrides)
    return Settings.from_mapping(raw)
