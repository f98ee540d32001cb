"""
Caching capability: key/value cache with memory, Redis and Memcached variants.
"""

from archartifacts.services.caching.base import CacheProvider
from archartifacts.services.caching.factory import create_cache
from archartifacts.services.caching.memory import MemoryCache
from archartifacts.services.caching.routes import build_cache_router, register_cache_routes
from archartifacts.services.caching.singleton import CacheService

__all__ = [
    "CacheProvider",
    "CacheService",
    "MemoryCache",
    "build_cache_router",
    "create_cache",
    "register_cache_routes",
]
