"""
archartifacts.core - Foundation Types
=======================================

Plain data structures, configuration, the exception hierarchy and the
shared EventEmitter. Nothing in ``core`` imports from ``services`` or
``server``; every other package depends on ``core``.
"""

from archartifacts.core.config import ArtifactsConfig, ServiceConfig, load_config
from archartifacts.core.enums import (
    Capability,
    CacheType,
    DataServeType,
    ExecutionStatus,
    FilingType,
    LoggerType,
    QueueType,
    WorkflowStatus,
)
from archartifacts.core.events import EmittedEvent, EventEmitter
from archartifacts.core.exceptions import (
    ArtifactsError,
    ConfigurationError,
    ProviderError,
    RequestValidationError,
    ServiceNotFoundError,
    ServiceNotInitializedError,
    WorkflowError,
)

__all__ = [
    # Config
    "ArtifactsConfig",
    "ServiceConfig",
    "load_config",
    # Enums
    "Capability",
    "CacheType",
    "QueueType",
    "LoggerType",
    "DataServeType",
    "FilingType",
    "ExecutionStatus",
    "WorkflowStatus",
    # Events
    "EventEmitter",
    "EmittedEvent",
    # Exceptions
    "ArtifactsError",
    "ConfigurationError",
    "ProviderError",
    "RequestValidationError",
    "ServiceNotInitializedError",
    "ServiceNotFoundError",
    "WorkflowError",
]
