"""Path resolution for wait requests."""

from __future__ import annotations

import os
from pathlib import Path

from waitfiles.errors import PathResolutionError


def absolute_path(path: str | os.PathLike[str], cwd: str | os.PathLike[str] | None = None) -> Path:
    """Resolve a path to an absolute, lexically cleaned form.

    Relative paths are joined onto ``cwd`` (the process working directory
    when not given). Redundant separators, ``.`` and ``..`` segments are
    removed without consulting the filesystem, so symlinks are left alone.

    Args:
        path: Path string or Path object (can be relative or absolute)
        cwd: Base directory for relative paths

    Returns:
        Absolute cleaned path

    Raises:
        PathResolutionError: If the working directory cannot be determined.
    """
    raw = os.fspath(path)
    if not os.path.isabs(raw):
        if cwd is None:
            try:
                cwd = os.getcwd()
            except OSError as e:
                raise PathResolutionError(raw, e) from e
        raw = os.path.join(os.fspath(cwd), raw)
    return Path(os.path.normpath(raw))
