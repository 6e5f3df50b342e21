"""
Common Utilities

Shared modules used across all components:
- config.py - Recognized settings and environment configuration
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
"""

from .config import (
    CONFIG_VERSION,
    MAX_BACKUPS,
    MANAGED_SETTINGS,
    EnvironmentConfig,
    build_default_settings,
    load_environment,
)
from .exceptions import (
    HybridConfigError,
    StorageError,
    RemoteSyncError,
    RestartError,
)
from .logging_setup import (
    setup_logging,
    get_service_logger,
    redirect_logs,
)

__all__ = [
    # Config
    "CONFIG_VERSION",
    "MAX_BACKUPS",
    "MANAGED_SETTINGS",
    "EnvironmentConfig",
    "build_default_settings",
    "load_environment",
    # Exceptions
    "HybridConfigError",
    "StorageError",
    "RemoteSyncError",
    "RestartError",
    # Logging
    "setup_logging",
    "get_service_logger",
    "redirect_logs",
]
