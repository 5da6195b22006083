"""Waiter unit: waits for one requested path and reports a single outcome."""

from __future__ import annotations

import os
from pathlib import Path

from waitfiles.errors import ChannelClosedError, PathResolutionError, ProbeError
from waitfiles.logging import get_logger
from waitfiles.outcome import Failed, Outcome, OutcomeChannel, Resolved
from waitfiles.probe import ExistenceProbe
from waitfiles.resolver import absolute_path

log = get_logger("waiter")


def wait_for_path(
    request: str | os.PathLike[str],
    channel: OutcomeChannel,
    probe: ExistenceProbe,
    cwd: str | os.PathLike[str] | None = None,
) -> Outcome | None:
    """Resolve ``request``, wait for it, and send exactly one outcome.

    Resolution and probe errors become a Failed outcome; they never escape.
    Any other exception propagates so the coordinator sees it at join time.

    Args:
        request: Path as given by the user (relative or absolute)
        channel: Channel shared with the coordinator
        probe: Blocking existence probe
        cwd: Base directory for relative requests (process cwd when None)

    Returns:
        The outcome that was sent, or None if the receiver had stopped
        listening.
    """
    raw = os.fspath(request)
    outcome: Outcome

    try:
        path: Path = absolute_path(raw, cwd)
    except PathResolutionError as e:
        log.error("Error resolving %s: %s", raw, e)
        outcome = Failed(raw, e)
    else:
        log.info("waiting for %s to exist", path)
        try:
            probe.wait_until_readable(path)
        except ProbeError as e:
            log.error("Error waiting for file %s: %s", path, e)
            outcome = Failed(path, e)
        else:
            outcome = Resolved(path)

    try:
        channel.send(outcome)
    except ChannelClosedError:
        log.info("Receiver has stopped listening for %s", outcome.path)
        return None
    return outcome
