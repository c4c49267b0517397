"""Building status derived from the portal's site and client listings.

The building-health metrics here are illustrative estimates computed from the
number of connected systems. They are not measured telemetry and should not
be presented as such.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Callable, Sequence

from ..const import (
    BASE_CARBON_REDUCTION,
    BASE_ENERGY_EFFICIENCY,
    BASE_WATER_SAVED,
    CARBON_PER_SYSTEM,
    MAX_ENERGY_EFFICIENCY,
    PORTAL_NAME,
    PORTAL_URL,
    WATER_PER_SYSTEM,
)
from ..models import BuildingMetrics, StatusView


class OperatingMode(str, Enum):
    """Seasonal operating mode of the rooftop units."""

    HEATING = "heating"
    COOLING = "cooling"
    NORMAL = "normal"


def operating_mode(month: int) -> OperatingMode:
    """Heating November to March, cooling May to September."""
    if month >= 11 or month <= 3:
        return OperatingMode.HEATING
    if 5 <= month <= 9:
        return OperatingMode.COOLING
    return OperatingMode.NORMAL


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def estimate_metrics(active_systems: int) -> BuildingMetrics:
    """Illustrative figures, capped efficiency and linear savings."""
    return BuildingMetrics(
        energy_efficiency=min(MAX_ENERGY_EFFICIENCY, BASE_ENERGY_EFFICIENCY + active_systems),
        carbon_reduction=round(BASE_CARBON_REDUCTION + active_systems * CARBON_PER_SYSTEM),
        water_conservation=round(BASE_WATER_SAVED + active_systems * WATER_PER_SYSTEM),
        active_systems=active_systems,
        automation_status="ACTIVE",
    )


def build_status_view(
    sites: Sequence[str],
    clients: Sequence[str],
    now: Callable[[], dt.datetime] = _utcnow,
) -> StatusView:
    """Compose the connected building status from portal listings."""
    active_systems = len(sites) + len(clients)
    return StatusView(
        connected=True,
        sites=list(sites),
        clients=list(clients),
        metrics=estimate_metrics(active_systems),
        portal=PORTAL_NAME,
        portal_url=PORTAL_URL,
        timestamp=now().isoformat(),
    )


def build_offline_status_view(error: str, now: Callable[[], dt.datetime] = _utcnow) -> StatusView:
    """Status shown when the portal cannot be reached."""
    return StatusView(
        connected=False,
        metrics=BuildingMetrics(),
        portal=PORTAL_NAME,
        portal_url=PORTAL_URL,
        error=error,
        timestamp=now().isoformat(),
    )
