"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Command-line overrides
- Config caching
- Conversion from dict to typed, validated Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from waitfiles.config.merge import merge_layers
from waitfiles.config.paths import get_config_paths
from waitfiles.config.schema import (
    Config,
    CoordinatorConfig,
    LoggingConfig,
    ProbeConfig,
)
from waitfiles.errors import ConfigError

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("waitfiles.config")

# Global cached config
_cached_config: Config | None = None

# Environment variable -> (section, key, converter)
_ENV_VARS: dict[str, tuple[str, str, type]] = {
    "WAITFILES_LOG": ("logging", "file", str),
    "WAITFILES_LOG_LEVEL": ("logging", "level", str),
    "WAITFILES_VERBOSE": ("logging", "verbose", int),
    "WAITFILES_POLL_INTERVAL": ("probe", "poll_interval", float),
    "WAITFILES_MAX_WORKERS": ("coordinator", "max_workers", int),
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML as dict, or empty dict on error.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build config dict from WAITFILES_* environment variables.

    Values that cannot be converted are logged and skipped.
    """
    overrides: dict[str, Any] = {}

    for name, (section, key, convert) in _ENV_VARS.items():
        raw = os.environ.get(name)
        if not raw:
            continue
        try:
            value = convert(raw)
        except ValueError:
            _log.warning("Ignoring %s=%r: expected %s", name, raw, convert.__name__)
            continue
        overrides.setdefault(section, {})[key] = value

    return overrides


def _number(section: str, key: str, value: Any, convert: type, default: Any = None) -> Any:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{section}.{key} must be a number, got {value!r}")
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{section}.{key} must be a number, got {value!r}") from e


def _string(section: str, key: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{section}.{key} must be a string, got {value!r}")
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def validate_config(config: Config) -> Config:
    """Check value ranges, raising ConfigError on the first bad value."""
    probe = config.probe
    if probe.poll_interval <= 0:
        raise ConfigError("probe.poll_interval must be positive")
    if probe.max_interval < probe.poll_interval:
        raise ConfigError("probe.max_interval must not be less than probe.poll_interval")
    if probe.backoff < 1:
        raise ConfigError("probe.backoff must be at least 1")
    if probe.max_errors < 1:
        raise ConfigError("probe.max_errors must be at least 1")

    workers = config.coordinator.max_workers
    if workers is not None and workers < 1:
        raise ConfigError("coordinator.max_workers must be at least 1")

    return config


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass.

    Args:
        data: Merged configuration dictionary.

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.
    """
    defaults = ProbeConfig()

    log_data = _section(data, "logging")
    logging_config = LoggingConfig(
        level=_string("logging", "level", log_data.get("level")),
        file=_string("logging", "file", log_data.get("file")),
        verbose=_number("logging", "verbose", log_data.get("verbose"), int),
    )

    probe_data = _section(data, "probe")
    poll_interval = _number(
        "probe", "poll_interval", probe_data.get("poll_interval"), float, defaults.poll_interval
    )
    # An unset max_interval follows a poll_interval raised above the default
    probe = ProbeConfig(
        poll_interval=poll_interval,
        max_interval=_number(
            "probe",
            "max_interval",
            probe_data.get("max_interval"),
            float,
            max(defaults.max_interval, poll_interval),
        ),
        backoff=_number("probe", "backoff", probe_data.get("backoff"), float, defaults.backoff),
        max_errors=_number(
            "probe", "max_errors", probe_data.get("max_errors"), int, defaults.max_errors
        ),
    )

    coordinator_data = _section(data, "coordinator")
    coordinator = CoordinatorConfig(
        max_workers=_number(
            "coordinator", "max_workers", coordinator_data.get("max_workers"), int
        ),
    )

    known_keys = {"logging", "probe", "coordinator"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return validate_config(
        Config(
            logging=logging_config,
            probe=probe,
            coordinator=coordinator,
            extra=extra,
        )
    )


def load_config(
    project_root: str | Path | None = None,
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    reload: bool = False,
) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Explicit overrides (command-line flags)
    2. Environment variables
    3. Explicit config file (--config)
    4. Project config (<project_root>/.waitfiles/config.yaml)
    5. User config
    6. System config

    Only the plain global config (no arguments) is cached.

    Raises:
        ConfigError: If the merged configuration is invalid.
    """
    global _cached_config

    is_global = project_root is None and config_path is None and not overrides
    if _cached_config is not None and not reload and is_global:
        return _cached_config

    if config_path is not None and not Path(config_path).exists():
        raise ConfigError(f"config file not found: {config_path}")

    layers: list[tuple[str, dict[str, Any]]] = []

    for path in get_config_paths(project_root, config_path):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            layers.append((str(path), config_data))

    layers.append(("environment", env_overrides()))
    layers.append(("command line", overrides or {}))

    merged, origins = merge_layers(layers)
    for key, source in sorted(origins.items()):
        _log.debug("%s set by %s", key, source)

    config = dict_to_config(merged)

    if is_global:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config.

    Useful for testing or forcing a reload.
    """
    global _cached_config
    _cached_config = None
