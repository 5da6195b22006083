"""Configuration management for waitfiles.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/waitfiles/ or %PROGRAMDATA%)
- User-level config (~/.config/waitfiles/, ~/.waitfiles/ or %APPDATA%)
- Project-level config (<cwd>/.waitfiles/)
- An explicit --config file
- Environment variable and command-line overrides (highest priority)

Example usage:
    from waitfiles.config import load_config

    config = load_config(project_root=".")
    print(config.probe.poll_interval)
"""

from waitfiles.config.loader import (
    get_config,
    load_config,
    reset_config,
)
from waitfiles.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from waitfiles.config.schema import (
    Config,
    CoordinatorConfig,
    LoggingConfig,
    ProbeConfig,
)

__all__ = [
    # Main API
    "Config",
    "load_config",
    "get_config",
    "reset_config",
    # Schema types
    "CoordinatorConfig",
    "LoggingConfig",
    "ProbeConfig",
    # Path utilities
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
]
