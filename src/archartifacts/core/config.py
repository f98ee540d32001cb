"""
archartifacts.core.config - Configuration Management
======================================================

Configuration for the services server. Values are loaded with the following
priority (highest first):

    1. Explicit constructor arguments
    2. Environment variables (prefixed with ARTIFACTS_)
    3. YAML configuration file (artifacts.yaml)
    4. Default values defined in the models below

Architecture Context:
    The top-level ArtifactsConfig is created once by the application factory.
    Each capability gets its own ServiceConfig, whose ``type`` and
    ``options`` are handed verbatim to that capability's factory:

        ArtifactsConfig
            ├── caching     → create_cache(type, options, emitter)
            ├── queueing    → create_queue(...)
            ├── logging     → create_logger(...)
            ├── ...
            └── (server settings) → uvicorn, structlog

    ``options`` is deliberately an untyped dict: each provider reads the
    keys it needs (``url``, ``filename``, ``base_dir`` ...) and the factory
    layer does not validate them.

Usage:
    # Load from environment variables:
    config = ArtifactsConfig()

    # Load from YAML file:
    config = load_config("artifacts.yaml")

    # Explicit overrides:
    config = ArtifactsConfig(caching=ServiceConfig(type="redis", options={"url": "redis://cache:6379/0"}))

Environment Variables:
    ARTIFACTS_LOG_LEVEL=DEBUG
    ARTIFACTS_ENVIRONMENT=prod
    ARTIFACTS_CACHING__TYPE=redis
    ARTIFACTS_CACHING__OPTIONS='{"url": "redis://cache:6379/0"}'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from archartifacts.core.exceptions import ConfigurationError


# =============================================================================
# Per-Capability Configuration
# =============================================================================
class ServiceConfig(BaseModel):
    """Factory inputs for one capability.

    Attributes:
        type: Provider variant name. ``None`` or an unknown value selects
            the capability's default (in-memory / console) provider.
        options: Provider options passed through unvalidated.
        enabled: When False the capability is not initialized at startup
            and its routes are not mounted.
    """

    type: Optional[str] = Field(
        default=None,
        description="Provider variant, e.g. 'memory', 'redis', 'memcached', 'file'",
    )
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Provider options passed through to the provider constructor",
    )
    enabled: bool = Field(
        default=True,
        description="Initialize this capability and mount its routes at startup",
    )


# =============================================================================
# Main Configuration
# =============================================================================
# Environment Variable Mapping:
#   ARTIFACTS_LOG_LEVEL         → config.log_level
#   ARTIFACTS_CACHING__TYPE     → config.caching.type (nested, double underscore)
# =============================================================================
class ArtifactsConfig(BaseSettings):
    """Top-level configuration for the services server.

    Attributes:
        environment: Deployment environment. ``prod`` switches log output
            to JSON by default.
        log_level: Python logging level name.
        log_format: ``console`` for human-readable logs, ``json`` for
            machine-readable logs. ``None`` derives it from environment.
        host: Bind address for ``python -m archartifacts``.
        port: Bind port for ``python -m archartifacts``.
        event_history_size: How many emitted events the EventEmitter keeps
            for ``GET /api/events/recent``.
        caching ... filing: One ServiceConfig per capability.

    Example:
        >>> config = ArtifactsConfig(
        ...     log_level="DEBUG",
        ...     caching=ServiceConfig(type="memory"),
        ... )
    """

    # -------------------------------------------------------------------------
    # General Settings
    # -------------------------------------------------------------------------
    environment: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: Optional[Literal["console", "json"]] = Field(
        default=None,
        description="Log renderer; None picks json for prod, console otherwise",
    )
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="HTTP bind port")
    event_history_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="Number of recent events retained by the EventEmitter",
    )

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------
    caching: ServiceConfig = Field(default_factory=lambda: ServiceConfig(type="memory"))
    queueing: ServiceConfig = Field(default_factory=lambda: ServiceConfig(type="memory"))
    logging: ServiceConfig = Field(default_factory=lambda: ServiceConfig(type="console"))
    scheduling: ServiceConfig = Field(default_factory=ServiceConfig)
    searching: ServiceConfig = Field(default_factory=ServiceConfig)
    dataserve: ServiceConfig = Field(default_factory=lambda: ServiceConfig(type="memory"))
    workflow: ServiceConfig = Field(default_factory=ServiceConfig)
    notifying: ServiceConfig = Field(default_factory=ServiceConfig)
    measuring: ServiceConfig = Field(default_factory=ServiceConfig)
    filing: ServiceConfig = Field(default_factory=lambda: ServiceConfig(type="local"))

    model_config = {
        "env_prefix": "ARTIFACTS_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }

    @property
    def resolved_log_format(self) -> str:
        """The log renderer actually used (explicit value or env default)."""
        if self.log_format is not None:
            return self.log_format
        return "json" if self.environment == "prod" else "console"

    def service(self, name: str) -> ServiceConfig:
        """Return the ServiceConfig for a capability name.

        Raises:
            ConfigurationError: If ``name`` is not a configured capability.
        """
        value = getattr(self, name, None)
        if not isinstance(value, ServiceConfig):
            raise ConfigurationError(
                message=f"No service configuration named '{name}'",
                error_code="UNKNOWN_SERVICE_CONFIG",
                details={"name": name},
            )
        return value


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None) -> ArtifactsConfig:
    """Load configuration from a YAML file and/or environment variables.

    Args:
        path: Path to a YAML configuration file. If None, looks for
            'artifacts.yaml' in the current directory. If that doesn't
            exist either, uses pure defaults + environment variables.

    Returns:
        A fully validated ArtifactsConfig instance.

    Raises:
        ConfigurationError: If the YAML file cannot be parsed.
        FileNotFoundError: If an explicit path is provided but doesn't exist.
    """
    if path is None:
        default_path = Path("artifacts.yaml")
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(config_path) as f:
            try:
                raw_data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Invalid YAML in {path}: {exc}",
                    error_code="INVALID_YAML",
                    details={"path": str(path)},
                ) from exc
            if isinstance(raw_data, dict):
                yaml_data = raw_data

    return ArtifactsConfig(**yaml_data)
