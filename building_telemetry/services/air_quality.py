"""Air-quality view built from the provider's current readings."""

from __future__ import annotations

import datetime as dt
import math
from typing import Any, Callable, Dict, Mapping, Optional

from ..const import AQI_BANDS, AQI_WORST_BAND
from ..core.exceptions import MalformedUpstreamDataError
from ..models import AirQualityView, AqiBand

# view key -> provider field
COMPONENT_FIELDS = {
    "pm25": "pm2_5",
    "pm10": "pm10",
    "no2": "nitrogen_dioxide",
    "o3": "ozone",
    "co": "carbon_monoxide",
    "so2": "sulphur_dioxide",
}


def aqi_status(aqi: float) -> AqiBand:
    """Map a European AQI value to its status band."""
    for band in AQI_BANDS:
        if aqi <= band.upper:
            return band
    return AQI_WORST_BAND


def _round1(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return math.floor(value * 10 + 0.5) / 10


def build_air_quality_view(
    payload: Mapping[str, Any],
    now: Callable[[], dt.datetime] = lambda: dt.datetime.now(dt.timezone.utc),
) -> AirQualityView:
    """Build the air-quality view.

    Raises:
        MalformedUpstreamDataError: If ``current`` or its AQI is missing
    """
    current = payload.get("current") if isinstance(payload, Mapping) else None
    if not isinstance(current, Mapping):
        raise MalformedUpstreamDataError("Air-quality payload has no 'current' object", field="current")

    aqi = current.get("european_aqi")
    if isinstance(aqi, bool) or not isinstance(aqi, (int, float)):
        raise MalformedUpstreamDataError(f"Invalid european_aqi: {aqi!r}", field="current.european_aqi")

    components: Dict[str, Optional[float]] = {
        key: _round1(current.get(field)) for key, field in COMPONENT_FIELDS.items()
    }
    return AirQualityView(
        aqi=aqi,
        status=aqi_status(aqi),
        components=components,
        uv_index=current.get("uv_index"),
        timestamp=now().isoformat(),
    )
