"""Weather and energy models for building telemetry."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class EnergyModel:
    """Coefficients used to derive consumption from weather variables."""

    optimal_temperature: float = 20.0
    temperature_impact_factor: float = 2.5
    humidity_threshold_min: float = 30.0
    humidity_threshold_max: float = 70.0
    humidity_impact: float = 15.0
    max_lighting_consumption: float = 25.0
    wind_speed_threshold: float = 15.0
    wind_ventilation_bonus: float = 8.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "EnergyModel":
        """Build a model from a mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


@dataclass(frozen=True)
class EnergyEstimate:
    """Estimated consumption breakdown in kWh per hour."""

    hvac: float
    lighting: float
    total: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather variables for one timestep."""

    temperature: float
    humidity: float
    cloud_cover: float
    wind_speed: float
    extras: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WeatherCondition:
    description: str
    icon: str


@dataclass(frozen=True)
class AqiBand:
    upper: float
    status: str
    color: str
    bg: str


@dataclass
class WeatherView:
    """Current, hourly and daily weather annotated with energy estimates."""

    current: Dict[str, Any]
    current_energy: EnergyEstimate
    forecast_24h: List[Dict[str, Any]]
    hourly: Dict[str, List[Any]]
    daily: Dict[str, List[Any]]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "current": dict(self.current),
            "energy": {
                "current": self.current_energy.as_dict(),
                "forecast_24h": [
                    {"time": slot["time"], "consumption": slot["consumption"].as_dict()}
                    for slot in self.forecast_24h
                ],
            },
            "hourly": dict(self.hourly),
            "daily": dict(self.daily),
        }


@dataclass
class AirQualityView:
    aqi: Optional[float]
    status: AqiBand
    components: Dict[str, Optional[float]]
    uv_index: Optional[float]
    timestamp: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "aqi": self.aqi,
            "status": {"status": self.status.status, "color": self.status.color, "bg": self.status.bg},
            "components": dict(self.components),
            "uvIndex": self.uv_index,
            "timestamp": self.timestamp,
        }
