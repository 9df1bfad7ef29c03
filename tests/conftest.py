# This file is part of PPA Builder, a tool for publishing Debian source packages to Launchpad PPAs.
#
# Copyright 2025 Canonical Ltd.
#
# SPDX-License-Identifier: GPL-3.0-only
#
# PPA Builder is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License version 3, as published by the
# Free Software Foundation.
#
# PPA Builder is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranties of MERCHANTABILITY,
# SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with
# PPA Builder. If not, see <http://www.gnu.org/licenses/>.

"""Pytest fixtures and configuration for PPA Builder tests."""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest import mock

import pytest

from ppabuilder import config
from ppabuilder.models import MaintainerProfile, PackageSpec


class CommandRecorder:
    """Stand-in for subprocess.run that records every command.

    Return codes and stdout are chosen by the longest matching command
    prefix (``sudo`` is ignored when matching). Unmatched commands succeed
    with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self._rules: dict[str, tuple[int, str]] = {}

    def set(self, prefix: str, returncode: int = 0, stdout: str = "") -> None:
        self._rules[prefix] = (returncode, stdout)

    def fail(self, prefix: str, returncode: int = 1) -> None:
        self.set(prefix, returncode)

    @staticmethod
    def _argv(cmd: list[str]) -> list[str]:
        return list(cmd[1:]) if cmd and cmd[0] == "sudo" else list(cmd)

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        joined = " ".join(self._argv(cmd))
        returncode, stdout = 0, ""
        for prefix in sorted(self._rules, key=len, reverse=True):
            if joined.startswith(prefix):
                returncode, stdout = self._rules[prefix]
                break
        return subprocess.CompletedProcess(cmd, returncode, stdout, "")

    def commands(self, program: str) -> list[list[str]]:
        """Return recorded calls whose program (after sudo) is ``program``."""
        return [c for c in self.calls if self._argv(c)[:1] == [program]]

    def joined(self) -> list[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def temp_home(monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Create a temporary home directory and set HOME/XDG paths."""
    with tempfile.TemporaryDirectory() as tmpdir:
        home = Path(tmpdir)
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
        monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))
        monkeypatch.setattr(Path, "home", lambda: home)
        yield home


@pytest.fixture
def settings(temp_home: Path) -> dict[str, Any]:
    """Settings with every path redirected into the temporary home."""
    cfg = config.load_config()
    cfg["paths"]["build_root"] = str(temp_home / "ppa_build")
    cfg["paths"]["dput_config"] = str(temp_home / ".dput.cf")
    return cfg


@pytest.fixture
def commands(monkeypatch: pytest.MonkeyPatch) -> CommandRecorder:
    """Replace subprocess.run for ppabuilder.tools and run unprivileged."""
    recorder = CommandRecorder()
    monkeypatch.setattr("ppabuilder.tools.subprocess.run", recorder)
    monkeypatch.setattr("ppabuilder.tools.is_root", lambda: False)
    return recorder


@pytest.fixture
def profile() -> MaintainerProfile:
    return MaintainerProfile(
        name="Jane Doe",
        email="jane@example.com",
        launchpad_username="jdoe",
        gpg_key="0123456789ABCDEF",
    )


@pytest.fixture
def package() -> PackageSpec:
    return PackageSpec(name="hello-tool", version="1.2.3", description="Greets the world")


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A plain Makefile project without a recognised build descriptor."""
    src = tmp_path / "src" / "hello"
    src.mkdir(parents=True)
    (src / "Makefile").write_text("all:\n\techo hello\n")
    (src / "hello.c").write_text("int main(void) { return 0; }\n")
    return src


@pytest.fixture
def cmake_tree(tmp_path: Path) -> Path:
    """A CMake project using GTK and SQLite."""
    src = tmp_path / "src" / "gui"
    src.mkdir(parents=True)
    (src / "CMakeLists.txt").write_text(
        "cmake_minimum_required(VERSION 3.10)\n"
        "project(gui)\n"
        "find_package(PkgConfig REQUIRED)\n"
        "find_package(GTK3 REQUIRED)\n"
        "find_package(SQLite3 REQUIRED)\n"
        "add_executable(gui main.c)\n"
    )
    (src / "main.c").write_text("int main(void) { return 0; }\n")
    return src


@pytest.fixture
def non_tty_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock sys.__stdout__.isatty() to return False."""
    mock_stdout = mock.MagicMock()
    mock_stdout.isatty.return_value = False
    monkeypatch.setattr("sys.__stdout__", mock_stdout)


@pytest.fixture
def tty_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock sys.__stdout__.isatty() to return True."""
    mock_stdout = mock.MagicMock()
    mock_stdout.isatty.return_value = True
    monkeypatch.setattr("sys.__stdout__", mock_stdout)
