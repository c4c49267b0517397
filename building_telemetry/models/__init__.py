"""Data models for building telemetry.

This package contains the records passed between the portal client, the
batch fetcher and the aggregators.
"""

from .credential import Credential
from .sensor_data import (
    BatchSummary,
    CombinedTimeline,
    Failure,
    GroupTotals,
    Sample,
    SampleQuality,
    SensorDescriptor,
    SensorResult,
    SensorStats,
    Success,
    TimelineSeries,
    ValueReading,
)
from .status import BuildingMetrics, StatusView
from .weather import (
    AirQualityView,
    AqiBand,
    EnergyEstimate,
    EnergyModel,
    WeatherCondition,
    WeatherSnapshot,
    WeatherView,
)

__all__ = [
    "AirQualityView",
    "AqiBand",
    "BatchSummary",
    "BuildingMetrics",
    "CombinedTimeline",
    "Credential",
    "EnergyEstimate",
    "EnergyModel",
    "Failure",
    "GroupTotals",
    "Sample",
    "SampleQuality",
    "SensorDescriptor",
    "SensorResult",
    "SensorStats",
    "StatusView",
    "Success",
    "TimelineSeries",
    "ValueReading",
    "WeatherCondition",
    "WeatherSnapshot",
    "WeatherView",
]
