"""Waiter outcomes and the channel that carries them to the coordinator."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from waitfiles.errors import ChannelClosedError


@dataclass(frozen=True)
class Resolved:
    """The path exists and is readable."""

    path: Path

    @property
    def ok(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.path} exists!"


@dataclass(frozen=True)
class Failed:
    """The waiter gave up on its request.

    Attributes:
        path: Absolute path, or the raw request if it could not be resolved.
        error: The error that ended the wait.
    """

    path: Path | str
    error: BaseException

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.path}: {self.error}"


Outcome = Union[Resolved, Failed]


class OutcomeChannel:
    """Many-sender, single-receiver channel of outcomes.

    Once the receiver calls close(), further sends raise ChannelClosedError
    instead of queueing outcomes nobody will read.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Outcome] = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, outcome: Outcome) -> None:
        """Queue an outcome for the receiver.

        Raises:
            ChannelClosedError: If the receiver has stopped listening.
        """
        with self._lock:
            if self._closed:
                raise ChannelClosedError(f"receiver has stopped listening for {outcome.path}")
            self._queue.put(outcome)

    def receive(self, timeout: float | None = None) -> Outcome | None:
        """Take the next outcome, or None if none arrives within ``timeout``."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        """Stop listening. Later sends raise ChannelClosedError."""
        with self._lock:
            self._closed = True

    def __len__(self) -> int:
        return self._queue.qsize()
