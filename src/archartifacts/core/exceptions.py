"""
archartifacts.core.exceptions - Custom Exception Hierarchy
============================================================

This module defines the structured exception hierarchy for the Architecture
Artifacts services. Components raise and catch specific exception types
that carry contextual information instead of bare ``Exception``.

Exception Hierarchy:
    ArtifactsError (base)
        ├── ConfigurationError         - Missing/invalid provider options
        ├── ProviderError              - Backing-store operation failed
        ├── RequestValidationError     - Required request field missing (HTTP 400)
        ├── ServiceNotInitializedError - get_instance() before initialize()
        ├── ServiceNotFoundError       - Unknown capability name in the registry
        └── WorkflowError              - Workflow definition/execution failure

How Routes Use This:
    Route handlers map ``RequestValidationError`` to ``400`` and every other
    exception (including third-party client errors) to ``500`` with the
    exception's message as plain text.

Usage:
    >>> from archartifacts.core.exceptions import ProviderError
    >>> raise ProviderError(
    ...     message="Container 'docs' already exists.",
    ...     error_code="CONTAINER_EXISTS",
    ...     details={"container": "docs"},
    ... )
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
# All framework exceptions inherit from this base class so that callers can
# catch every service-layer error with a single except clause.
# =============================================================================
class ArtifactsError(Exception):
    """Base exception for all Architecture Artifacts service errors.

    Attributes:
        message: Human-readable error description. This is also what
            ``str(exc)`` returns, and what HTTP routes send back on failure.
        error_code: Machine-readable code (UPPER_SNAKE_CASE).
        details: Arbitrary dict with additional debugging context.

    Example:
        >>> try:
        ...     registry.caching.get_instance()
        ... except ArtifactsError as e:
        ...     print(f"[{e.error_code}] {e.message}")
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised from provider constructors when a required option is missing.
# Factories let it propagate so misconfiguration fails fast at startup.
# =============================================================================
class ConfigurationError(ArtifactsError):
    """Raised when a provider or the application is misconfigured.

    Common Causes:
        - Redis/Memcached provider selected without a connection ``url``
        - File logger selected without a ``filename``
        - Malformed YAML configuration file

    Example:
        >>> raise ConfigurationError(
        ...     message="Memcached connection URL is required.",
        ...     error_code="MISSING_URL",
        ...     details={"provider": "memcached"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Provider Error
# =============================================================================
class ProviderError(ArtifactsError):
    """Raised when a provider rejects an operation on its backing store.

    Examples are creating a dataserve container that already exists or
    adding to one that does not. Connectivity errors from third-party
    clients (redis, aiomcache) are NOT wrapped; they propagate unchanged.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PROVIDER_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Request Validation Error
# =============================================================================
class RequestValidationError(ArtifactsError):
    """Raised by route handlers when a required request field is missing.

    The check happens before any provider is invoked. Routes translate this
    into ``400`` with the fixed message carried by the exception.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "BAD_REQUEST",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Registry Errors
# =============================================================================
class ServiceNotInitializedError(ArtifactsError):
    """Raised when a service singleton is used before ``initialize()``.

    Attributes:
        service_name: Display name of the uninitialized service.
    """

    def __init__(
        self,
        service_name: str,
        error_code: str = "SERVICE_NOT_INITIALIZED",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["service_name"] = service_name

        super().__init__(
            message=(
                f"{service_name} service not initialized. "
                f"Call initialize() first."
            ),
            error_code=error_code,
            details=enriched_details,
        )

        self.service_name = service_name


class ServiceNotFoundError(ArtifactsError):
    """Raised when the registry is asked for an unknown capability."""

    def __init__(
        self,
        service_name: str,
        available: Optional[list[str]] = None,
        error_code: str = "SERVICE_NOT_FOUND",
    ) -> None:
        super().__init__(
            message=f"Service '{service_name}' not found",
            error_code=error_code,
            details={"service_name": service_name, "available": available or []},
        )

        self.service_name = service_name


# =============================================================================
# Workflow Error
# =============================================================================
class WorkflowError(ArtifactsError):
    """Raised when a workflow cannot be defined or a run fails.

    Attributes:
        workflow_name: Name of the workflow involved.
        step_name: The failing step, when the failure happened inside a step.

    Example:
        >>> raise WorkflowError(
        ...     message="Workflow 'publish' not found.",
        ...     workflow_name="publish",
        ...     error_code="WORKFLOW_NOT_FOUND",
        ... )
    """

    def __init__(
        self,
        message: str,
        workflow_name: str,
        step_name: Optional[str] = None,
        error_code: str = "WORKFLOW_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["workflow_name"] = workflow_name
        if step_name:
            enriched_details["step_name"] = step_name

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.workflow_name = workflow_name
        self.step_name = step_name
