"""Searching capability: keyed JSON documents with substring search."""

from archartifacts.services.searching.factory import create_search
from archartifacts.services.searching.provider import SearchProvider
from archartifacts.services.searching.routes import build_search_router, register_search_routes
from archartifacts.services.searching.singleton import SearchService

__all__ = [
    "SearchProvider",
    "SearchService",
    "build_search_router",
    "create_search",
    "register_search_routes",
]
