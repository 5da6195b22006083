"""Blocking existence probes.

The coordinator depends only on the ExistenceProbe protocol, so backends can
be swapped without touching it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from waitfiles.probe.polling import PollingProbe
from waitfiles.probe.protocol import ExistenceProbe

if TYPE_CHECKING:
    from waitfiles.config.schema import ProbeConfig


def create_probe(config: ProbeConfig | None = None) -> ExistenceProbe:
    """Build the probe described by ``config`` (defaults when None)."""
    if config is None:
        return PollingProbe()
    return PollingProbe(
        poll_interval=config.poll_interval,
        max_interval=config.max_interval,
        backoff=config.backoff,
        max_errors=config.max_errors,
    )


__all__ = [
    "ExistenceProbe",
    "PollingProbe",
    "create_probe",
]
