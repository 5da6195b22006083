"""Exception hierarchy for waitfiles.

Per-path errors (PathResolutionError, ProbeError) are caught at the waiter
boundary and reported as Failed outcomes. CoordinatorError subclasses are
fatal for the whole run.
"""

from __future__ import annotations

from pathlib import Path


class WaitFilesError(Exception):
    """Base class for all waitfiles errors."""


class ConfigError(WaitFilesError):
    """A configuration value is out of range or has the wrong type."""


class PathResolutionError(WaitFilesError):
    """A request could not be turned into an absolute path."""

    def __init__(self, request: str, cause: BaseException | None = None) -> None:
        self.request = request
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"cannot resolve {request!r}{detail}")


class ProbeError(WaitFilesError):
    """The existence probe gave up on a path."""

    def __init__(self, path: Path, message: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


class ChannelClosedError(WaitFilesError):
    """An outcome was sent after the receiver stopped listening."""


class CoordinatorError(WaitFilesError):
    """Fatal error in the completion coordinator."""


class ChannelDisconnectedError(CoordinatorError):
    """Every waiter unit exited before all outcomes were received."""

    def __init__(self, received: int, expected: int) -> None:
        self.received = received
        self.expected = expected
        super().__init__(
            f"waiter units disconnected after {received} of {expected} outcomes"
        )


class JoinFailureError(CoordinatorError):
    """A waiter unit terminated abnormally and could not be joined cleanly."""

    def __init__(self, request: str, cause: BaseException) -> None:
        self.request = request
        self.cause = cause
        super().__init__(f"waiter for {request!r} terminated abnormally: {cause!r}")
