"""Concurrent fetch of many sensor trend streams.

Every descriptor is fetched in parallel. A failure on one sensor is recorded
against that sensor and never fails the batch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Protocol, Sequence, Tuple

from ..const import ORDER_ASCENDING
from ..models import BatchSummary, Failure, Sample, SensorDescriptor, SensorResult, Success

_LOGGER = logging.getLogger(__name__)


class TrendSource(Protocol):
    async def read_trend_samples(self, trend_id: str, order_by: str = ...) -> List[Sample]:
        ...


def _failure_reason(exc: Exception) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


def summarize(results: Sequence[SensorResult]) -> BatchSummary:
    summary = BatchSummary(total=len(results))
    for result in results:
        if result.ok:
            summary.succeeded += 1
            summary.points += len(result.samples)
        else:
            summary.failed += 1
            summary.failed_ids.append(result.descriptor.id)
    return summary


class SensorBatchFetcher:
    """Fetch a group of sensors concurrently with per-sensor isolation."""

    __slots__ = ("_source",)

    def __init__(self, source: TrendSource) -> None:
        self._source = source

    async def fetch_all(
        self,
        descriptors: Iterable[SensorDescriptor],
        order_by: str = ORDER_ASCENDING,
    ) -> Tuple[SensorResult, ...]:
        """Fetch every descriptor and return one result per descriptor.

        Args:
            descriptors: Sensors to fetch
            order_by: Sort directive passed to the portal

        Returns:
            Results in the same order as ``descriptors``
        """
        descriptors = tuple(descriptors)
        if not descriptors:
            return ()

        outcomes = await asyncio.gather(
            *(self._source.read_trend_samples(d.path, order_by) for d in descriptors),
            return_exceptions=True,
        )

        results: List[SensorResult] = []
        for descriptor, outcome in zip(descriptors, outcomes):
            if isinstance(outcome, Exception):
                _LOGGER.warning(f"Failed to fetch sensor {descriptor.id} ({descriptor.name}): {outcome}")
                results.append(SensorResult(descriptor, Failure(_failure_reason(outcome), outcome)))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.append(SensorResult(descriptor, Success(tuple(outcome))))

        summary = summarize(results)
        if summary.succeeded:
            _LOGGER.info(
                f"Sensor batch: {summary.succeeded}/{summary.total} loaded ({summary.points} data points)"
            )
        else:
            _LOGGER.error(f"Sensor batch: no data loaded for {summary.total} sensors")
        return tuple(results)
