"""Statistics derived from sensor batch results."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import (
    CombinedTimeline,
    GroupTotals,
    Sample,
    SensorDescriptor,
    SensorResult,
    SensorStats,
    TimelineSeries,
)

_LOGGER = logging.getLogger(__name__)


def compute_stats(samples: Sequence[Sample]) -> SensorStats:
    """Compute min, max, mean and current over numeric samples.

    Gaps count towards ``point_count`` only. ``current`` is the value of the
    latest non-gap sample by date. With no numeric samples every statistic
    is None.
    """
    ordered = sorted(samples, key=lambda s: s.sample_date)
    values = [s.value for s in ordered if s.value is not None]
    if not values:
        return SensorStats(point_count=len(ordered), valid_count=0)
    return SensorStats(
        point_count=len(ordered),
        valid_count=len(values),
        minimum=min(values),
        maximum=max(values),
        mean=sum(values) / len(values),
        current=values[-1],
    )


def stats_for_results(
    results: Iterable[SensorResult],
) -> List[Tuple[SensorDescriptor, Optional[SensorStats]]]:
    """Pair each descriptor with its statistics, or None for failures."""
    return [
        (result.descriptor, compute_stats(result.samples) if result.ok else None)
        for result in results
    ]


def build_combined_timeline(results: Iterable[SensorResult]) -> CombinedTimeline:
    """Align successful sensors on one time axis.

    The axis is taken from the first successful sensor that has samples.
    Other series are padded with None or truncated to the axis length.
    """
    labels: Tuple = ()
    series: List[TimelineSeries] = []
    for result in results:
        if not result.ok or not result.samples:
            continue
        samples = result.samples
        if not labels:
            labels = tuple(s.sample_date for s in samples)
        values = [s.value for s in samples[: len(labels)]]
        values.extend([None] * (len(labels) - len(values)))
        if len(samples) != len(labels) and _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Sensor %s has %d samples, axis has %d", result.descriptor.id, len(samples), len(labels)
            )
        series.append(TimelineSeries(result.descriptor, tuple(values)))
    return CombinedTimeline(labels=labels, series=tuple(series))


def group_totals(results: Iterable[SensorResult]) -> GroupTotals:
    """Sum current, mean, min and max across sensors with numeric data."""
    available = [
        stats
        for _, stats in stats_for_results(results)
        if stats is not None and stats.available
    ]
    if not available:
        return GroupTotals(sensor_count=0)
    return GroupTotals(
        sensor_count=len(available),
        current=sum(s.current for s in available),
        mean=sum(s.mean for s in available),
        minimum=sum(s.minimum for s in available),
        maximum=sum(s.maximum for s in available),
    )


def latest_value(result: SensorResult) -> Optional[float]:
    """Most recent numeric value of a result, or None."""
    if not result.ok:
        return None
    return compute_stats(result.samples).current
