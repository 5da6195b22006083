"""Existence probe protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ExistenceProbe(Protocol):
    """Protocol for blocking until a path becomes readable.

    Implementations:
    - PollingProbe: stat/open polling with backoff on transient errors
    """

    def wait_until_readable(self, path: Path) -> None:
        """Block the calling thread until ``path`` exists and is readable.

        The wait is unbounded and cannot be cancelled.

        Args:
            path: Absolute path to wait for.

        Raises:
            ProbeError: If the probe gives up on the path.
        """
        ...
