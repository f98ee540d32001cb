"""
archartifacts.services - Pluggable Capabilities
=================================================

One subpackage per capability. Each follows the same layout:

    <capability>/
    ├── base.py / provider.py   provider contract and implementation(s)
    ├── factory.py              create_<capability>(type, options, emitter)
    ├── routes.py               FastAPI router, mounted when options["app"] is set
    └── singleton.py            <Capability>Service(ServiceSingleton)

Shared plumbing lives next to the subpackages: ``base`` (Provider),
``singleton`` (ServiceSingleton), ``http`` (route helpers), ``matching``
(document search), ``serialization`` (string-store encoding) and
``files`` (blocking file helpers).
"""

from archartifacts.services.base import Provider
from archartifacts.services.caching import CacheService, create_cache
from archartifacts.services.dataserve import DataServeService, create_dataserve
from archartifacts.services.filing import FilingService, create_filing
from archartifacts.services.logger import LoggerService, create_logger
from archartifacts.services.measuring import MeasuringService, create_measuring
from archartifacts.services.notifying import NotifierService, create_notifier
from archartifacts.services.queueing import QueueService, create_queue
from archartifacts.services.scheduling import SchedulerService, create_scheduler
from archartifacts.services.searching import SearchService, create_search
from archartifacts.services.singleton import ServiceSingleton
from archartifacts.services.workflow import WorkflowService, create_workflow

__all__ = [
    # Plumbing
    "Provider",
    "ServiceSingleton",
    # Factories
    "create_cache",
    "create_dataserve",
    "create_filing",
    "create_logger",
    "create_measuring",
    "create_notifier",
    "create_queue",
    "create_scheduler",
    "create_search",
    "create_workflow",
    # Services
    "CacheService",
    "DataServeService",
    "FilingService",
    "LoggerService",
    "MeasuringService",
    "NotifierService",
    "QueueService",
    "SchedulerService",
    "SearchService",
    "WorkflowService",
]
