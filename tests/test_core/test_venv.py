from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from pipsbom.exceptions import TraversalError
from pipsbom.models import EnvironmentReference
from pipsbom.core.venv import (
    get_venv_from_env,
    has_default_venv,
    has_pyvenv_cfg,
    scan_pyvenv_cfg,
    search_venv,
)


def _make_env(directory: Path) -> Path:
    """Create a directory that looks like a virtual environment."""
    directory.mkdir(parents=True)
    (directory / "pyvenv.cfg").write_text("home = /usr/bin\n", encoding="utf-8")
    return directory


@pytest.mark.unit
class TestGetVenvFromEnv:
    """Tests for the VIRTUAL_ENV lookup."""

    def test_active_environment(self) -> None:
        env = get_venv_from_env({"VIRTUAL_ENV": "/home/u/.venv"})

        assert env == EnvironmentReference(True, ".venv", "/home/u/.venv")

    def test_unset_variable(self) -> None:
        assert get_venv_from_env({}) == EnvironmentReference.not_found()

    def test_empty_variable(self) -> None:
        assert get_venv_from_env({"VIRTUAL_ENV": ""}).found is False

    def test_trailing_separator(self) -> None:
        env = get_venv_from_env({"VIRTUAL_ENV": "/opt/envs/build/"})

        assert env.name == "build"
        assert env.path == "/opt/envs/build/"

    def test_root_path_has_no_name(self) -> None:
        """A value without any directory name cannot satisfy the invariant."""
        assert get_venv_from_env({"VIRTUAL_ENV": "/"}).found is False

    def test_relative_value(self) -> None:
        env = get_venv_from_env({"VIRTUAL_ENV": "myenv"})

        assert env == EnvironmentReference(True, "myenv", "myenv")

    def test_defaults_to_process_environment(self) -> None:
        with patch.dict(os.environ, {"VIRTUAL_ENV": "/srv/app/venv"}):
            env = get_venv_from_env()

        assert env.name == "venv"
        assert env.path == "/srv/app/venv"


@pytest.mark.unit
class TestHasDefaultVenv:
    """Tests for the conventional directory check."""

    def test_dot_venv(self, tmp_path: Path) -> None:
        (tmp_path / ".venv").mkdir()

        env = has_default_venv(tmp_path)

        assert env.found is True
        assert env.name == ".venv"
        assert env.path == os.path.abspath(tmp_path / ".venv")

    def test_plain_venv(self, tmp_path: Path) -> None:
        (tmp_path / "venv").mkdir()

        env = has_default_venv(tmp_path)

        assert env.name == "venv"
        assert Path(env.path).is_absolute()

    def test_hidden_variant_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".venv").mkdir()
        (tmp_path / "venv").mkdir()

        assert has_default_venv(tmp_path).name == ".venv"

    def test_none_present(self, tmp_path: Path) -> None:
        (tmp_path / "env").mkdir()

        assert has_default_venv(tmp_path) == EnvironmentReference.not_found()

    def test_relative_root_gives_absolute_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "venv").mkdir()
        monkeypatch.chdir(tmp_path)

        env = has_default_venv(".")

        assert env.path == os.path.abspath(tmp_path / "venv")


@pytest.mark.unit
class TestScanPyvenvCfg:
    """Tests for the recursive pyvenv.cfg scan."""

    def test_has_pyvenv_cfg(self, tmp_path: Path) -> None:
        assert has_pyvenv_cfg(tmp_path) is False
        (tmp_path / "pyvenv.cfg").write_text("", encoding="utf-8")
        assert has_pyvenv_cfg(tmp_path) is True

    def test_finds_nested_environment(self, tmp_path: Path) -> None:
        env_dir = _make_env(tmp_path / "tools" / "py-env")

        env = scan_pyvenv_cfg(tmp_path)

        assert env.found is True
        assert env.name == "py-env"
        assert env.path == os.path.abspath(env_dir)

    def test_no_environment(self, tmp_path: Path) -> None:
        (tmp_path / "src" / "pkg").mkdir(parents=True)
        (tmp_path / "src" / "pkg" / "__init__.py").write_text("", encoding="utf-8")

        assert scan_pyvenv_cfg(tmp_path) == EnvironmentReference.not_found()

    def test_stops_at_first_match(self, tmp_path: Path) -> None:
        """Sorted depth-first order: ``a/...`` is reached before ``b``."""
        _make_env(tmp_path / "a" / "deep" / "env-one")
        _make_env(tmp_path / "b")

        env = scan_pyvenv_cfg(tmp_path)

        assert env.name == "env-one"

    def test_does_not_descend_after_match(self, tmp_path: Path) -> None:
        outer = _make_env(tmp_path / "outer")
        _make_env(outer / "inner")

        checked = []
        real = has_pyvenv_cfg

        def _spy(path):
            checked.append(Path(path).name)
            return real(path)

        with patch("pipsbom.core.venv.has_pyvenv_cfg", side_effect=_spy):
            env = scan_pyvenv_cfg(tmp_path)

        assert env.name == "outer"
        assert "inner" not in checked

    def test_traversal_failure_is_raised(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()

        with patch("os.scandir", side_effect=PermissionError(13, "denied")):
            with pytest.raises(TraversalError) as exc_info:
                scan_pyvenv_cfg(tmp_path)

        assert exc_info.value.operation == "walk"

    def test_missing_root_is_a_traversal_failure(self, tmp_path: Path) -> None:
        with pytest.raises(TraversalError):
            scan_pyvenv_cfg(tmp_path / "missing")


@pytest.mark.unit
class TestSearchVenv:
    """Tests for the three-step search order."""

    def test_active_environment_wins_regardless_of_disk(self, tmp_path: Path) -> None:
        (tmp_path / ".venv").mkdir()

        env = search_venv(tmp_path, environ={"VIRTUAL_ENV": "/home/u/.venv"})

        assert env == EnvironmentReference(True, ".venv", "/home/u/.venv")

    def test_active_environment_skips_later_steps(self, tmp_path: Path) -> None:
        with patch("pipsbom.core.venv.has_default_venv") as default_mock, patch(
            "pipsbom.core.venv.scan_pyvenv_cfg"
        ) as scan_mock:
            search_venv(tmp_path, environ={"VIRTUAL_ENV": "/x/env"})

        default_mock.assert_not_called()
        scan_mock.assert_not_called()

    def test_conventional_directory_before_scan(self, tmp_path: Path) -> None:
        (tmp_path / ".venv").mkdir()
        (tmp_path / "venv").mkdir()
        _make_env(tmp_path / "other")

        with patch("pipsbom.core.venv.scan_pyvenv_cfg") as scan_mock:
            env = search_venv(tmp_path, environ={})

        assert env.name == ".venv"
        scan_mock.assert_not_called()

    def test_falls_back_to_scan(self, tmp_path: Path) -> None:
        env_dir = _make_env(tmp_path / "envs" / "py311")

        env = search_venv(tmp_path, environ={})

        assert env == EnvironmentReference(True, "py311", os.path.abspath(env_dir))

    def test_nothing_found(self, tmp_path: Path) -> None:
        (tmp_path / "setup.py").write_text("", encoding="utf-8")

        env = search_venv(tmp_path, environ={})

        assert env.found is False
        assert env.name == ""
        assert env.path == ""

    def test_scan_failure_propagates(self, tmp_path: Path) -> None:
        with patch(
            "pipsbom.core.venv.walk_directories",
            side_effect=TraversalError("denied", file_path=str(tmp_path)),
        ):
            with pytest.raises(TraversalError):
                search_venv(tmp_path, environ={})
