"""Shared test utilities for waitfiles tests."""

from __future__ import annotations

import threading
from pathlib import Path

from waitfiles.errors import ProbeError
from waitfiles.outcome import Outcome


class InstantProbe:
    """Probe that reports every path as readable immediately."""

    def __init__(self) -> None:
        self.seen: list[Path] = []
        self._lock = threading.Lock()

    def wait_until_readable(self, path: Path) -> None:
        with self._lock:
            self.seen.append(path)


class FailingProbe:
    """Probe that raises ProbeError for chosen file names, resolves the rest."""

    def __init__(self, failing: set[str]) -> None:
        self.failing = failing

    def wait_until_readable(self, path: Path) -> None:
        if path.name in self.failing:
            raise ProbeError(path, f"gave up on {path}")


class CrashingProbe:
    """Probe that raises an unexpected (non-probe) exception."""

    def wait_until_readable(self, path: Path) -> None:
        raise RuntimeError(f"probe crashed on {path}")


class GatedProbe:
    """Probe that blocks each path until the test releases it.

    Example:
        probe = GatedProbe()
        ...
        probe.release("a.txt")
    """

    def __init__(self) -> None:
        self._gates: dict[str, threading.Event] = {}
        self._lock = threading.Lock()
        self.started = threading.Semaphore(0)

    def _gate(self, name: str) -> threading.Event:
        with self._lock:
            return self._gates.setdefault(name, threading.Event())

    def wait_until_readable(self, path: Path) -> None:
        gate = self._gate(path.name)
        self.started.release()
        gate.wait()

    def release(self, name: str) -> None:
        self._gate(name).set()

    def release_all(self) -> None:
        with self._lock:
            gates = list(self._gates.values())
        for gate in gates:
            gate.set()


class RecordingReporter:
    """Reporter stand-in that records what the coordinator tells it."""

    def __init__(self) -> None:
        self.outcomes: list[Outcome] = []
        self.finished_with = None

    def report(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def finished(self, summary) -> None:
        self.finished_with = summary
