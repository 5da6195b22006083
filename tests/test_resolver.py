"""Tests for path resolution."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from waitfiles.errors import PathResolutionError
from waitfiles.resolver import absolute_path


class TestAbsolutePath:
    """Test absolute_path()."""

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        """Test an absolute path is returned unchanged."""
        target = tmp_path / "a.txt"
        assert absolute_path(target) == target

    def test_relative_joined_onto_cwd(self, tmp_path: Path) -> None:
        """Test a relative path is joined onto cwd."""
        assert absolute_path("a.txt", cwd=tmp_path) == tmp_path / "a.txt"

    def test_relative_uses_process_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the process cwd is used when none is given."""
        monkeypatch.chdir(tmp_path)
        expected = Path(os.path.normpath(os.path.join(os.getcwd(), "out/b.txt")))
        assert absolute_path("out/b.txt") == expected

    def test_dot_segments_removed(self, tmp_path: Path) -> None:
        """Test . and .. segments are removed lexically."""
        result = absolute_path("./x/./y/../a.txt", cwd=tmp_path)
        assert result == tmp_path / "x" / "a.txt"

    def test_redundant_separators_removed(self, tmp_path: Path) -> None:
        """Test repeated separators are collapsed."""
        result = absolute_path(f"{tmp_path}{os.sep}{os.sep}a.txt")
        assert result == tmp_path / "a.txt"

    def test_parent_of_cwd(self, tmp_path: Path) -> None:
        """Test .. can climb above cwd."""
        result = absolute_path("../sibling/a.txt", cwd=tmp_path / "here")
        assert result == tmp_path / "sibling" / "a.txt"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX root")
    def test_parent_at_root_stays_at_root(self) -> None:
        """Test .. at the root stays at the root."""
        assert absolute_path("/../../a.txt") == Path("/a.txt")

    def test_does_not_resolve_symlinks(self, tmp_path: Path) -> None:
        """Cleaning is lexical, so a symlinked directory keeps its own name."""
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        try:
            link.symlink_to(real, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        assert absolute_path("link/a.txt", cwd=tmp_path) == link / "a.txt"

    def test_does_not_require_existence(self, tmp_path: Path) -> None:
        """Test resolution does not touch the filesystem."""
        result = absolute_path("missing/dir/file.txt", cwd=tmp_path)
        assert result == tmp_path / "missing" / "dir" / "file.txt"
        assert not result.exists()

    def test_unavailable_cwd_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test PathResolutionError when the cwd is gone."""
        def no_cwd() -> str:
            raise FileNotFoundError("cwd was removed")

        monkeypatch.setattr("waitfiles.resolver.os.getcwd", no_cwd)

        with pytest.raises(PathResolutionError) as excinfo:
            absolute_path("a.txt")
        assert excinfo.value.request == "a.txt"
        assert isinstance(excinfo.value.cause, FileNotFoundError)

    def test_absolute_path_ignores_unavailable_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an absolute path resolves even without a cwd."""
        def no_cwd() -> str:
            raise FileNotFoundError("cwd was removed")

        monkeypatch.setattr("waitfiles.resolver.os.getcwd", no_cwd)
        assert absolute_path(tmp_path / "a.txt") == tmp_path / "a.txt"
