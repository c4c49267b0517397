"""Services built on top of the core clients.

- Sensor batch fetching and statistics
- Energy estimate
- Weather, air-quality and building status views
"""

from .air_quality import aqi_status, build_air_quality_view
from .batch_fetcher import SensorBatchFetcher, summarize
from .energy import estimate, estimate_snapshot
from .sensor_stats import build_combined_timeline, compute_stats, group_totals, stats_for_results
from .status_aggregator import OperatingMode, build_offline_status_view, build_status_view, operating_mode
from .weather_aggregator import build_weather_view, describe_weather_code

__all__ = [
    "OperatingMode",
    "SensorBatchFetcher",
    "aqi_status",
    "build_air_quality_view",
    "build_combined_timeline",
    "build_offline_status_view",
    "build_status_view",
    "build_weather_view",
    "compute_stats",
    "describe_weather_code",
    "estimate",
    "estimate_snapshot",
    "group_totals",
    "operating_mode",
    "stats_for_results",
    "summarize",
]
