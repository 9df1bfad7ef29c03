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

"""Tests for build dependency installation."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest import mock

import pytest

from ppabuilder.debpkg import builddeps
from ppabuilder.debpkg.control import merge_build_depends
from ppabuilder.debpkg.scaffold import create_debian_dir
from ppabuilder.exceptions import ToolInstallError
from ppabuilder.models import MaintainerProfile, PackageSpec


@pytest.fixture
def scaffolded(
    source_tree: Path, package: PackageSpec, profile: MaintainerProfile, settings: dict[str, Any]
) -> Path:
    create_debian_dir(source_tree, package, profile, settings)
    return source_tree


@pytest.fixture
def equivs_output(commands):
    """Make equivs-build drop a .deb into its working directory."""
    original = commands.__call__

    def fake_run(cmd, **kwargs):
        result = original(cmd, **kwargs)
        if cmd[0] == "equivs-build" and result.returncode == 0:
            (Path(kwargs["cwd"]) / "hello-tool-build-deps_1.0_all.deb").write_text("deb")
        return result

    with mock.patch("ppabuilder.tools.subprocess.run", side_effect=fake_run):
        yield commands


@pytest.fixture
def helpers_present():
    with mock.patch("ppabuilder.debpkg.builddeps.find_tool", return_value=Path("/usr/bin/mk-build-deps")):
        yield


class TestRenderEquivsControl:
    def test_fields(self) -> None:
        text = builddeps.render_equivs_control("hello-tool", ["debhelper-compat (= 13)", "cmake"])
        assert "Package: hello-tool-build-deps\n" in text
        assert "Depends: debhelper-compat (= 13), cmake\n" in text
        assert "Architecture: all\n" in text


class TestInstallBuildDeps:
    def test_missing_control_is_fatal(self, tmp_path: Path, commands) -> None:
        with pytest.raises(ToolInstallError) as exc_info:
            builddeps.install_build_deps(tmp_path, "hello-tool")
        assert "debian/control" in exc_info.value.message
        assert commands.calls == []

    def test_installs_metapackage(self, scaffolded: Path, equivs_output, helpers_present) -> None:
        merge_build_depends(scaffolded / "debian" / "control", ["cmake"])

        installed = builddeps.install_build_deps(scaffolded, "hello-tool")

        assert installed == ["debhelper-compat (= 13)", "cmake"]
        calls = equivs_output.joined()
        assert "sudo apt-get install -y build-essential cmake" in calls
        assert any(c.startswith("equivs-build ") for c in calls)
        final = equivs_output.calls[-1]
        assert final[:4] == ["sudo", "apt-get", "install", "-y"]
        assert final[-1].endswith("hello-tool-build-deps_1.0_all.deb")

    def test_installs_helpers_when_missing(self, scaffolded: Path, equivs_output) -> None:
        with mock.patch("ppabuilder.debpkg.builddeps.find_tool", return_value=None):
            builddeps.install_build_deps(scaffolded, "hello-tool")

        assert equivs_output.calls[0] == ["sudo", "apt-get", "install", "-y", "devscripts", "equivs"]

    def test_equivs_failure(self, scaffolded: Path, equivs_output, helpers_present) -> None:
        equivs_output.fail("equivs-build")

        with pytest.raises(ToolInstallError) as exc_info:
            builddeps.install_build_deps(scaffolded, "hello-tool")
        assert exc_info.value.packages == ["debhelper-compat (= 13)"]

    def test_metapackage_install_failure(self, scaffolded: Path, equivs_output, helpers_present) -> None:
        equivs_output.fail("apt-get install -y /")

        with pytest.raises(ToolInstallError):
            builddeps.install_build_deps(scaffolded, "hello-tool")
