"""Parsing of trend samples returned by the automation portal."""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any, List, Optional

from ..models import Sample, SampleQuality
from .exceptions import MalformedUpstreamDataError

_LOGGER = logging.getLogger(__name__)


def parse_sample_value(raw: Any) -> Optional[float]:
    """Convert a raw sample value to a float.

    Returns None for gaps: None, booleans, blank or non-numeric strings and
    non-finite numbers.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def parse_sample_date(raw: Any) -> dt.datetime:
    """Parse an ISO-8601 sample date. Naive dates are taken as UTC."""
    if not isinstance(raw, str) or not raw:
        raise MalformedUpstreamDataError(f"Invalid SampleDate: {raw!r}", field="SampleDate")
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError as err:
        raise MalformedUpstreamDataError(f"Invalid SampleDate: {raw!r}", field="SampleDate") from err
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def parse_sample(raw: Any) -> Sample:
    if not isinstance(raw, dict):
        raise MalformedUpstreamDataError(f"Sample is not an object: {raw!r}", field="sample")
    return Sample(
        sample_date=parse_sample_date(raw.get("SampleDate")),
        value=parse_sample_value(raw.get("Value")),
        quality=SampleQuality.from_raw(raw.get("Quality")),
    )


def parse_trend_samples(data: Any, trend_id: str = "") -> List[Sample]:
    """Parse the trend-sample endpoint body.

    Args:
        data: Decoded JSON body
        trend_id: Trend identifier, used in messages only

    Returns:
        Samples in the order the portal returned them. Samples without a
        usable ``SampleDate`` are skipped.

    Raises:
        MalformedUpstreamDataError: If the body is not an array of objects
    """
    if not isinstance(data, list):
        raise MalformedUpstreamDataError(
            f"Trend samples for {trend_id or 'trend'} is not an array", field="TrendSamples"
        )
    samples: List[Sample] = []
    undated = 0
    for item in data:
        try:
            samples.append(parse_sample(item))
        except MalformedUpstreamDataError as err:
            if err.field != "SampleDate":
                raise
            undated += 1
    if undated:
        _LOGGER.warning(f"Skipped {undated} samples without a valid SampleDate for {trend_id or 'trend'}")
    if _LOGGER.isEnabledFor(logging.DEBUG):
        gaps = sum(1 for s in samples if s.value is None)
        _LOGGER.debug(f"Parsed {len(samples)} samples ({gaps} gaps) for {trend_id}")
    return samples
