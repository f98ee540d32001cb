"""
archartifacts.core.enums - Type-Safe Enumerations
===================================================

All enums inherit from both ``str`` and ``Enum`` so they compare equal to
plain strings (``CacheType.REDIS == "redis"``) and serialize cleanly in
JSON and YAML. Factories still accept plain strings; these enums name the
strings they recognize.
"""

from enum import Enum


# =============================================================================
# Capability Names
# =============================================================================
# The registry keys, and the path segment under /api/ for each capability.
# =============================================================================
class Capability(str, Enum):
    """Named service areas, each with one shared provider instance."""

    CACHING = "caching"
    QUEUEING = "queueing"
    LOGGING = "logging"
    SCHEDULING = "scheduling"
    SEARCHING = "searching"
    DATASERVE = "dataserve"
    WORKFLOW = "workflow"
    NOTIFYING = "notifying"
    MEASURING = "measuring"
    FILING = "filing"


# =============================================================================
# Provider Variants
# =============================================================================
class CacheType(str, Enum):
    """Cache provider variants. Anything else falls back to MEMORY."""

    MEMORY = "memory"
    REDIS = "redis"
    MEMCACHED = "memcached"


class QueueType(str, Enum):
    """Queue provider variants. Anything else falls back to MEMORY."""

    MEMORY = "memory"
    REDIS = "redis"


class LoggerType(str, Enum):
    """Logger provider variants. Anything else falls back to CONSOLE."""

    CONSOLE = "console"
    FILE = "file"


class DataServeType(str, Enum):
    """DataServe provider variants. Anything else falls back to MEMORY."""

    MEMORY = "memory"
    FILE = "file"


class FilingType(str, Enum):
    """Filing provider variants. Anything else falls back to LOCAL."""

    LOCAL = "local"


# =============================================================================
# Runtime Statuses
# =============================================================================
class ExecutionStatus(str, Enum):
    """Outcome of one scheduled-task execution."""

    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowStatus(str, Enum):
    """Progress notifications passed to a workflow status callback."""

    STEP_START = "step_start"
    STEP_END = "step_end"
    STEP_ERROR = "step_error"
    WORKFLOW_COMPLETE = "workflow_complete"
