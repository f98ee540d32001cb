"""DataServe capability: named containers of JSON documents."""

from archartifacts.services.dataserve.base import DataServeProvider
from archartifacts.services.dataserve.factory import create_dataserve
from archartifacts.services.dataserve.memory import MemoryDataServe
from archartifacts.services.dataserve.routes import (
    build_dataserve_router,
    register_dataserve_routes,
)
from archartifacts.services.dataserve.singleton import DataServeService

__all__ = [
    "DataServeProvider",
    "DataServeService",
    "MemoryDataServe",
    "build_dataserve_router",
    "create_dataserve",
    "register_dataserve_routes",
]
