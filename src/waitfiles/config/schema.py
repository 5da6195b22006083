"""Configuration schema dataclasses for waitfiles.

Defines the structure of configuration at all levels (system, user, project).
All fields have defaults to support partial configs that merge together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    file: str | None = None  # Log file path
    verbose: int | None = None  # 0-4, overrides level


@dataclass
class ProbeConfig:
    """Existence probe configuration.

    Example config.yaml:
        probe:
          poll_interval: 0.1
          max_interval: 2.0
          backoff: 2.0
          max_errors: 10
    """

    poll_interval: float = 0.1  # Seconds between polls while the path is missing
    max_interval: float = 2.0  # Upper bound for the backed-off interval
    backoff: float = 2.0  # Interval multiplier after a transient error
    max_errors: int = 10  # Consecutive transient errors before giving up


@dataclass
class CoordinatorConfig:
    """Completion coordinator configuration."""

    max_workers: int | None = None  # None = one thread per path


@dataclass
class Config:
    """Root configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    coordinator: CoordinatorConfig = field(default_factory=CoordinatorConfig)

    # Unknown top-level sections
    extra: dict[str, Any] = field(default_factory=dict)
