"""
================================================================================
Global Configuration for UI Automation
================================================================================

Centralized configuration management for the UI automation core, including
logging setup and configuration file loading.

Features:
    - Module-level configuration store shared by the whole process
    - YAML-based configuration loading
    - Environment variable support
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be parsed."""
    pass


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Should be called once at the start of a test session or tool run so
    that every module logging through `loguru.logger` shares the same sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    # Optional rotating file sink
    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "20 MB"),
            retention=get_config("logging.retention", "14 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """
    Returns the configured Loguru logger instance.

    Ensures the logger is initialized before returning.
    """
    if not _logger_initialized:
        init_logger()
    return logger


def _ensure_config_loaded() -> None:
    global _config
    if not _config:
        _load_config()


def _candidate_config_dirs() -> List[Path]:
    dirs = []
    override = os.getenv("AUTOTEST_CONFIG_DIR")
    if override:
        dirs.append(Path(override))
    dirs.extend([
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ])
    return dirs


def _load_config() -> None:
    """
    Loads configuration from defaults, YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()

    config_dir = next((d for d in _candidate_config_dirs() if d.is_dir()), None)
    if not config_dir:
        logger.warning("No configuration directory found. Using defaults.")
    else:
        _config = _deep_merge(_config, _read_yaml(config_dir / "config.yaml"))

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
    logger.debug(f"Loaded configuration from {path}")
    return data


def _get_defaults() -> Dict[str, Any]:
    """
    Returns default configuration values.
    """
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "ui": {
            "base_url": "http://localhost:3000",
            "default_timeout_ms": 30000,
        },
        "browser": {
            "type": "chromium",
            "headless": True,
            "viewport": {"width": 1920, "height": 1080},
        },
        "visual": {
            "report_root": "reports/visual-tests",
            "threshold": 0.1,
            "settle_timeout_ms": 2000,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Use double underscore to separate nested keys
        - Example: UI__DEFAULT_TIMEOUT_MS=5000 overrides ui.default_timeout_ms
    """
    for key, value in os.environ.items():
        if "__" in key:
            parts = [p.lower() for p in key.split("__")]
            if parts[0] in _config:
                _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    d[keys[-1]] = value


def _coerce(value: Any, reference: Any) -> Any:
    """Convert env-provided strings to the type of the default value."""
    if not isinstance(value, str) or reference is None or isinstance(reference, str):
        return value
    if isinstance(reference, bool):
        return value.lower() in ("true", "1", "yes", "on")
    try:
        if isinstance(reference, int):
            return int(value)
        if isinstance(reference, float):
            return float(value)
    except ValueError:
        return value
    return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "visual.threshold").
        default: Default value to return if key is not found. Its type is also
            used to convert string values coming from environment variables.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("ui.default_timeout_ms", 30000)
        30000
        >>> get_config("visual.threshold", 0.1)
        0.1
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return _coerce(value, default)


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config() -> None:
    """
    Reloads the configuration from files and environment.
    """
    global _config, _logger_initialized
    _config = {}
    _logger_initialized = False
    _load_config()
    logger.info("Configuration reloaded.")
