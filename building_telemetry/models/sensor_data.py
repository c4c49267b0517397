"""Sensor data models for building telemetry."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union


class SampleQuality(str, Enum):
    """Data-quality flag attached to a trend sample."""

    GOOD = "good"
    UNCERTAIN = "uncertain"
    BAD = "bad"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, raw: Any) -> "SampleQuality":
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


@dataclass(frozen=True)
class SensorDescriptor:
    """One named, addressable trend stream on the automation portal."""

    id: str
    name: str
    path: str
    display_meta: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def short_name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Sample:
    """Single timestamped reading. ``value`` is None for a reporting gap."""

    sample_date: dt.datetime
    value: Optional[float]
    quality: SampleQuality = SampleQuality.UNKNOWN


@dataclass(frozen=True)
class Success:
    samples: Tuple[Sample, ...]


@dataclass(frozen=True)
class Failure:
    reason: str
    error: Optional[BaseException] = field(default=None, compare=False)


Outcome = Union[Success, Failure]


@dataclass(frozen=True)
class SensorResult:
    """Outcome of fetching one descriptor within a batch."""

    descriptor: SensorDescriptor
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def samples(self) -> Tuple[Sample, ...]:
        if isinstance(self.outcome, Success):
            return self.outcome.samples
        return ()


@dataclass(frozen=True)
class SensorStats:
    """Per-sensor statistics. Statistics are None when unavailable."""

    point_count: int
    valid_count: int
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    mean: Optional[float] = None
    current: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.valid_count > 0


@dataclass(frozen=True)
class TimelineSeries:
    descriptor: SensorDescriptor
    values: Tuple[Optional[float], ...]


@dataclass(frozen=True)
class CombinedTimeline:
    """Shared time axis with one value series per successful sensor."""

    labels: Tuple[dt.datetime, ...]
    series: Tuple[TimelineSeries, ...]


@dataclass(frozen=True)
class GroupTotals:
    """Sums of per-sensor statistics across sensors with numeric data."""

    sensor_count: int
    current: Optional[float] = None
    mean: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


@dataclass(frozen=True)
class ValueReading:
    """Single value read from the portal."""

    value: Any
    raw: Any


@dataclass
class BatchSummary:
    """Counts describing one batch fetch."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    points: int = 0
    failed_ids: List[str] = field(default_factory=list)
