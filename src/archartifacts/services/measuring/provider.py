"""
archartifacts.services.measuring.provider - Time-Series Measures
==================================================================

Named metrics, each an append-only list of timestamped numeric values,
with range queries over inclusive UTC time windows.

    add("deploys", 1)
    add("deploys", 1)
    total("deploys", start, end)      → 2.0
    average("build_secs", start, end) → 0.0 when no measures fall in range

Timestamps without timezone information are taken to be UTC.

Events (only when an emitter was supplied):
    measuring:add      {metric, measure}
    measuring:list     {metric, start, end, count}
    measuring:total    {metric, start, end, total}
    measuring:average  {metric, start, end, average}
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from archartifacts.core.events import EventEmitter
from archartifacts.services.base import Provider


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to a naive datetime, or convert an aware one to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class Measure(BaseModel):
    """One recorded value.

    Attributes:
        value: The numeric measurement.
        timestamp: When it was recorded (UTC).
    """

    value: float
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class MeasuringProvider(Provider):
    """In-memory metric store.

    Example:
        >>> metrics = MeasuringProvider()
        >>> await metrics.add("latency_ms", 120)
        >>> await metrics.add("latency_ms", 80)
        >>> await metrics.average("latency_ms", day_start, day_end)
        100.0
    """

    event_prefix = "measuring"

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        super().__init__(options, emitter)
        self._metrics: dict[str, list[Measure]] = {}

    async def add(
        self,
        metric: str,
        value: float,
        timestamp: Optional[datetime] = None,
    ) -> Measure:
        """Record ``value`` for ``metric`` (now, unless ``timestamp`` is given).

        Raises:
            pydantic.ValidationError: If ``value`` is not numeric.
        """
        fields: dict[str, Any] = {"value": value}
        if timestamp is not None:
            fields["timestamp"] = timestamp
        measure = Measure(**fields)
        self._metrics.setdefault(metric, []).append(measure)
        self._emit("add", metric=metric, measure=measure.model_dump(mode="json"))
        return measure

    async def list(self, metric: str, start: datetime, end: datetime) -> list[Measure]:
        """Measures of ``metric`` with ``start <= timestamp <= end``."""
        measures = self._in_range(metric, start, end)
        self._emit("list", metric=metric, start=start, end=end, count=len(measures))
        return measures

    async def total(self, metric: str, start: datetime, end: datetime) -> float:
        total = sum(measure.value for measure in self._in_range(metric, start, end))
        self._emit("total", metric=metric, start=start, end=end, total=total)
        return float(total)

    async def average(self, metric: str, start: datetime, end: datetime) -> float:
        """Mean of the values in range, or 0.0 when there are none."""
        measures = self._in_range(metric, start, end)
        average = sum(m.value for m in measures) / len(measures) if measures else 0.0
        self._emit("average", metric=metric, start=start, end=end, average=average)
        return average

    def list_metrics(self) -> list[str]:
        return sorted(self._metrics)

    def _in_range(self, metric: str, start: datetime, end: datetime) -> list[Measure]:
        start, end = as_utc(start), as_utc(end)
        return [m for m in self._metrics.get(metric, []) if start <= m.timestamp <= end]
