"""Existence probe implementation using polling.

Polling is preferred over native file watchers for cross-platform
reliability. A path counts as present once it can be opened for reading.
"""

from __future__ import annotations

import errno
import os
import stat
import time
from collections.abc import Callable
from pathlib import Path

from waitfiles.errors import ProbeError
from waitfiles.logging import TRACE, get_logger

log = get_logger("probe")

# Errors meaning "not there yet" rather than "something is wrong"
_MISSING = (FileNotFoundError, NotADirectoryError)


class PollingProbe:
    """Waits for a path by polling it at a fixed interval.

    A missing path is polled every ``poll_interval`` seconds indefinitely.
    Any other ``OSError`` (for example a permission error) is transient: the
    interval is multiplied by ``backoff`` up to ``max_interval``, and after
    ``max_errors`` consecutive errors the probe raises ProbeError. Seeing
    the path missing again resets the error streak.

    Example:
        probe = PollingProbe(poll_interval=0.5)
        probe.wait_until_readable(Path("/tmp/build/done.flag"))
    """

    def __init__(
        self,
        poll_interval: float = 0.1,
        max_interval: float = 2.0,
        backoff: float = 2.0,
        max_errors: int = 10,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the probe.

        Args:
            poll_interval: Seconds between polls while the path is missing
            max_interval: Upper bound for the backed-off interval
            backoff: Interval multiplier applied after each transient error
            max_errors: Consecutive transient errors tolerated before giving up
            sleep: Sleep function, replaceable in tests
        """
        self._poll_interval = poll_interval
        self._max_interval = max(max_interval, poll_interval)
        self._backoff = backoff
        self._max_errors = max_errors
        self._sleep = sleep

    @property
    def poll_interval(self) -> float:
        """Get the polling interval in seconds."""
        return self._poll_interval

    @staticmethod
    def is_readable(path: Path) -> bool:
        """Check once whether ``path`` exists and can be read.

        Returns:
            True if readable, False if the path does not exist yet

        Raises:
            OSError: For any other failure (treated as transient by the caller)
        """
        try:
            st = path.stat()
            # Opening a FIFO blocks until a writer connects, so only regular
            # files are opened
            if not stat.S_ISREG(st.st_mode):
                if not os.access(path, os.R_OK):
                    raise PermissionError(errno.EACCES, "path is not readable", str(path))
                return True
            with open(path, "rb"):
                return True
        except _MISSING:
            return False

    def wait_until_readable(self, path: Path) -> None:
        """Block until ``path`` is readable.

        Raises:
            ProbeError: After max_errors consecutive transient errors.
        """
        interval = self._poll_interval
        errors = 0

        while True:
            try:
                if self.is_readable(path):
                    log.debug("%s is readable", path)
                    return
            except OSError as e:
                errors += 1
                if errors >= self._max_errors:
                    raise ProbeError(
                        path,
                        f"gave up on {path} after {errors} consecutive errors: {e}",
                        e,
                    ) from e
                interval = min(interval * self._backoff, self._max_interval)
                log.warning("Error checking %s (%d/%d): %s", path, errors, self._max_errors, e)
            else:
                errors = 0
                interval = self._poll_interval
                log.log(TRACE, "%s does not exist yet", path)

            self._sleep(interval)
