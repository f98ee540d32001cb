"""Measuring capability: timestamped numeric metrics with range queries."""

from archartifacts.services.measuring.factory import create_measuring
from archartifacts.services.measuring.provider import Measure, MeasuringProvider
from archartifacts.services.measuring.routes import (
    build_measuring_router,
    register_measuring_routes,
)
from archartifacts.services.measuring.singleton import MeasuringService

__all__ = [
    "Measure",
    "MeasuringProvider",
    "MeasuringService",
    "build_measuring_router",
    "create_measuring",
    "register_measuring_routes",
]
