"""
================================================================================
Autotest UI Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - get_config: Convenience function to get configuration values
    - set_config / reload_config: Runtime configuration updates
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from autotest_ui.common import get_config, init_logger

    init_logger()
    timeout_ms = get_config("ui.default_timeout_ms", 30000)

================================================================================
"""

from .global_config import (
    ConfigurationError,
    get_config,
    get_logger,
    init_logger,
    reload_config,
    set_config,
)

__all__ = [
    "ConfigurationError",
    "get_config",
    "get_logger",
    "init_logger",
    "reload_config",
    "set_config",
]
