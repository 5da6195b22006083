"""Layered merge of configuration sources.

Sources are applied lowest priority first (system file up to command-line
flags). Nested sections merge key by key, so a project file that only sets
``probe.poll_interval`` keeps ``probe.backoff`` from the user file. The merge
also records which source set each leaf, which ``load_config`` logs so a
surprising value can be traced back to the file or variable it came from.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

# Dotted key ("probe.poll_interval") -> name of the source that set it
Origins = dict[str, str]


def _apply(
    target: dict[str, Any],
    layer: dict[str, Any],
    source: str,
    origins: Origins,
    prefix: str = "",
) -> None:
    # None means "not set here" so partial layers never blank out lower ones.
    # Lists and scalars replace; nested dicts are copied before being merged
    # into so the caller's dicts are never mutated.
    for key, value in layer.items():
        if value is None:
            continue
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            current = target.get(key)
            target[key] = dict(current) if isinstance(current, dict) else {}
            _apply(target[key], value, source, origins, f"{dotted}.")
        else:
            target[key] = value
            origins[dotted] = source


def merge_layers(layers: Iterable[tuple[str, dict[str, Any]]]) -> tuple[dict[str, Any], Origins]:
    """Merge named layers in order, later layers winning.

    Args:
        layers: ``(source, data)`` pairs, lowest priority first. ``source`` is
            a label such as a file path or ``"environment"``.

    Returns:
        The merged dict and the source of every leaf value in it.
    """
    merged: dict[str, Any] = {}
    origins: Origins = {}
    for source, data in layers:
        if data:
            _apply(merged, data, source, origins)
    return merged, origins
