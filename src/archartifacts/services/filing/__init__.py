"""Filing capability: path-addressed files under a local root directory."""

from archartifacts.services.filing.base import FilingProvider
from archartifacts.services.filing.factory import create_filing
from archartifacts.services.filing.local import LocalFiling
from archartifacts.services.filing.routes import build_filing_router, register_filing_routes
from archartifacts.services.filing.singleton import FilingService

__all__ = [
    "FilingProvider",
    "FilingService",
    "LocalFiling",
    "build_filing_router",
    "create_filing",
    "register_filing_routes",
]
