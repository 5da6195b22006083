"""Completion coordinator: fan out one waiter per path, fan in their outcomes.

Every waiter sends exactly one outcome, Resolved or Failed, so the drain
loop counts finished waiters rather than successes and cannot hang on a
failed path. The run is over when ``count == N``. Only then are the waiters
joined and the final signal emitted.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from waitfiles.errors import ChannelDisconnectedError, JoinFailureError
from waitfiles.logging import get_logger
from waitfiles.outcome import Failed, Outcome, OutcomeChannel, Resolved
from waitfiles.probe import ExistenceProbe
from waitfiles.reporter import Reporter
from waitfiles.waiter import wait_for_path

log = get_logger("coordinator")

# Seconds between checks for waiters that exited without reporting
DISCONNECT_CHECK_INTERVAL = 0.5


class CoordinatorState(Enum):
    """Lifecycle of a coordinator run."""

    IDLE = "idle"
    SPAWNING = "spawning"
    WAITING = "waiting"
    DRAINED = "drained"
    JOINING = "joining"
    DONE = "done"


@dataclass
class CompletionSummary:
    """What the coordinator heard back, in arrival order."""

    requested: int
    resolved: list[Path] = field(default_factory=list)
    failed: list[Failed] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.resolved) + len(self.failed)

    @property
    def all_resolved(self) -> bool:
        return len(self.resolved) == self.requested

    @property
    def any_resolved(self) -> bool:
        return bool(self.resolved)

    def record(self, outcome: Outcome) -> None:
        if isinstance(outcome, Resolved):
            self.resolved.append(outcome.path)
        else:
            self.failed.append(outcome)


class CompletionCoordinator:
    """Waits for a set of paths concurrently and aggregates the results.

    Each request runs ``wait_for_path`` on its own pool thread. With
    ``max_workers`` unset the pool has one thread per request; a smaller
    bound queues the remaining requests until a thread frees up.

    Example:
        coordinator = CompletionCoordinator(PollingProbe())
        summary = coordinator.run(["a.txt", "b.txt"])
        if not summary.all_resolved:
            ...
    """

    def __init__(
        self,
        probe: ExistenceProbe,
        *,
        max_workers: int | None = None,
        cwd: str | os.PathLike[str] | None = None,
        reporter: Reporter | None = None,
        check_interval: float = DISCONNECT_CHECK_INTERVAL,
    ) -> None:
        """Initialize the coordinator.

        Args:
            probe: Blocking existence probe shared by all waiters
            max_workers: Upper bound on concurrent waiters (None = one per path)
            cwd: Base directory for relative requests (process cwd when None)
            reporter: Receives each outcome and the final signal
            check_interval: Seconds between checks for disconnected waiters
        """
        self._probe = probe
        self._max_workers = max_workers
        self._cwd = cwd
        self._reporter = reporter or Reporter()
        self._check_interval = check_interval
        self._state = CoordinatorState.IDLE

    @property
    def state(self) -> CoordinatorState:
        return self._state

    def run(self, requests: Sequence[str | os.PathLike[str]]) -> CompletionSummary:
        """Wait for every request and return the summary.

        Blocks until each waiter has reported and been joined. There is no
        timeout: a path that never appears keeps the run waiting.

        Raises:
            JoinFailureError: If a waiter terminated with an exception, whether
                before or after reporting.
            ChannelDisconnectedError: If all waiters exit cleanly before N
                outcomes arrive.
        """
        requests = list(requests)
        summary = CompletionSummary(requested=len(requests))

        if requests:
            self._state = CoordinatorState.SPAWNING
            channel = OutcomeChannel()
            workers = min(self._max_workers or len(requests), len(requests))
            executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="waiter")

            try:
                futures: dict[Future[Outcome | None], str] = {}
                for request in requests:
                    future = executor.submit(
                        wait_for_path, request, channel, self._probe, self._cwd
                    )
                    futures[future] = os.fspath(request)
                log.debug("Spawned %d waiter(s) on %d thread(s)", len(futures), workers)

                self._state = CoordinatorState.WAITING
                self._drain(channel, futures, summary)
                self._state = CoordinatorState.DRAINED
            except BaseException:
                channel.close()
                executor.shutdown(wait=False, cancel_futures=True)
                raise

            channel.close()
            self._state = CoordinatorState.JOINING
            executor.shutdown(wait=True)
            self._join(futures)

        self._state = CoordinatorState.DONE
        self._reporter.finished(summary)
        return summary

    def _drain(
        self,
        channel: OutcomeChannel,
        futures: dict[Future[Outcome | None], str],
        summary: CompletionSummary,
    ) -> None:
        expected = len(futures)
        while summary.count < expected:
            outcome = channel.receive(timeout=self._check_interval)
            if outcome is None:
                # Waiters send before they finish, so all-done plus empty means
                # nothing else is coming.
                if all(f.done() for f in futures) and len(channel) == 0:
                    crashed = self._first_crash(futures)
                    if crashed is not None:
                        request, exc = crashed
                        raise JoinFailureError(request, exc) from exc
                    raise ChannelDisconnectedError(summary.count, expected)
                continue

            summary.record(outcome)
            log.debug("Received %d/%d: %s", summary.count, expected, outcome)
            self._reporter.report(outcome)

    def _join(self, futures: dict[Future[Outcome | None], str]) -> None:
        crashed = self._first_crash(futures)
        if crashed is not None:
            request, exc = crashed
            raise JoinFailureError(request, exc) from exc

    @staticmethod
    def _first_crash(
        futures: dict[Future[Outcome | None], str],
    ) -> tuple[str, BaseException] | None:
        """Return the request and exception of the first waiter that raised."""
        for future, request in futures.items():
            if future.done() and not future.cancelled():
                exc = future.exception()
                if exc is not None:
                    return request, exc
        return None
