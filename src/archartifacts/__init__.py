"""
Architecture Artifacts Services
================================

Small pluggable infrastructure services behind one FastAPI server:

    caching · queueing · logging · scheduling · searching
    dataserve · workflow · notifying · measuring

Each capability has swappable providers (memory, Redis, Memcached, file,
console), a factory that picks one by name, HTTP routes, and a singleton
wrapper held by the ServiceRegistry. Every provider operation is announced
on a shared EventEmitter as ``<capability>:<operation>``.

Quick Start:
    >>> from archartifacts.server import create_app
    >>> app = create_app()

    $ python -m archartifacts
"""

# =============================================================================
# Package Version
# =============================================================================
__version__ = "0.1.0"

from archartifacts.core.config import ArtifactsConfig, ServiceConfig, load_config
from archartifacts.core.events import EventEmitter
from archartifacts.registry import ServiceRegistry

__all__ = [
    "ArtifactsConfig",
    "EventEmitter",
    "ServiceConfig",
    "ServiceRegistry",
    "__version__",
    "load_config",
]
