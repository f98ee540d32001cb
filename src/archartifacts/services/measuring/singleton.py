"""Process-shared measuring service."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from archartifacts.services.measuring.factory import create_measuring
from archartifacts.services.measuring.provider import Measure, MeasuringProvider
from archartifacts.services.singleton import ServiceSingleton


class MeasuringService(ServiceSingleton[MeasuringProvider]):
    """Singleton wrapper around the metric store."""

    def __init__(self) -> None:
        super().__init__("Measuring", create_measuring)

    async def add(self, metric: str, value: float, timestamp: Optional[datetime] = None) -> Measure:
        return await self.get_instance().add(metric, value, timestamp)

    async def list(self, metric: str, start: datetime, end: datetime) -> list[Measure]:
        return await self.get_instance().list(metric, start, end)

    async def total(self, metric: str, start: datetime, end: datetime) -> float:
        return await self.get_instance().total(metric, start, end)

    async def average(self, metric: str, start: datetime, end: datetime) -> float:
        return await self.get_instance().average(metric, start, end)
