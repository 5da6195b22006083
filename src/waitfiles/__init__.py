"""waitfiles: block until a set of files all exist, then proceed."""

__version__ = "0.1.0"

# Public API
from waitfiles.coordinator import CompletionCoordinator, CompletionSummary, CoordinatorState
from waitfiles.errors import (
    ChannelDisconnectedError,
    CoordinatorError,
    JoinFailureError,
    PathResolutionError,
    ProbeError,
    WaitFilesError,
)
from waitfiles.outcome import Failed, Outcome, OutcomeChannel, Resolved
from waitfiles.probe import ExistenceProbe, PollingProbe, create_probe
from waitfiles.resolver import absolute_path
from waitfiles.waiter import wait_for_path

__all__ = [
    # Coordinator
    "CompletionCoordinator",
    "CompletionSummary",
    "CoordinatorState",
    # Waiter
    "wait_for_path",
    "absolute_path",
    # Outcomes
    "Outcome",
    "Resolved",
    "Failed",
    "OutcomeChannel",
    # Probes
    "ExistenceProbe",
    "PollingProbe",
    "create_probe",
    # Errors
    "WaitFilesError",
    "PathResolutionError",
    "ProbeError",
    "CoordinatorError",
    "ChannelDisconnectedError",
    "JoinFailureError",
]
