"""Building status models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class BuildingMetrics:
    """Illustrative building-health figures.

    These are estimates derived from the number of connected systems, not
    measured telemetry.
    """

    energy_efficiency: float = 0
    carbon_reduction: int = 0
    water_conservation: int = 0
    active_systems: int = 0
    automation_status: str = "OFFLINE"


@dataclass
class StatusView:
    connected: bool
    sites: List[str] = field(default_factory=list)
    clients: List[str] = field(default_factory=list)
    metrics: BuildingMetrics = field(default_factory=BuildingMetrics)
    portal: str = "IZITGreen"
    portal_url: str = ""
    error: Optional[str] = None
    timestamp: str = ""

    def as_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "connected": self.connected,
            "portal": self.portal,
            "portalUrl": self.portal_url,
            "sites": {"names": list(self.sites), "count": len(self.sites)},
            "clients": {"names": list(self.clients), "count": len(self.clients)},
            "metrics": {
                "energyEfficiency": self.metrics.energy_efficiency,
                "carbonReduction": self.metrics.carbon_reduction,
                "waterConservation": self.metrics.water_conservation,
                "activeSystems": self.metrics.active_systems,
                "automationStatus": self.metrics.automation_status,
            },
            "timestamp": self.timestamp,
        }
        if self.error is not None:
            result["error"] = self.error
        return result
