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

"""Tests for ppabuilder.models and ppabuilder.exceptions modules."""

from __future__ import annotations

from pathlib import Path

from ppabuilder.exceptions import BuildError, PpaBuilderError, ToolInstallError, ValidationError
from ppabuilder.models import BuildWorkspace, MaintainerProfile, PackageSpec


class TestMaintainerProfile:
    def test_identity(self) -> None:
        assert MaintainerProfile("Jane Doe", "jane@example.com", "jdoe").identity == "Jane Doe <jane@example.com>"


class TestPackageSpec:
    def test_derived_names(self) -> None:
        spec = PackageSpec("hello-tool", "1.2.3", "Greets")
        assert spec.dirname == "hello-tool-1.2.3"
        assert spec.tarball_name == "hello-tool_1.2.3.orig.tar.gz"

    def test_add_dependencies_skips_duplicates(self) -> None:
        spec = PackageSpec("a", "1.0.0", "d", dependencies=["cmake"])
        spec.add_dependencies(["build-essential", "cmake", "build-essential"])
        assert spec.dependencies == ["cmake", "build-essential"]


class TestBuildWorkspace:
    def test_debian_dir(self, tmp_path: Path) -> None:
        ws = BuildWorkspace(root=tmp_path, path=tmp_path / "a-1.0.0")
        assert ws.debian_dir == tmp_path / "a-1.0.0" / "debian"
        assert ws.tarball is None


class TestExceptions:
    def test_str_is_message(self) -> None:
        assert str(BuildError(message="Package build failed", returncode=2)) == "Package build failed"

    def test_subclasses_share_base(self) -> None:
        for exc in (ValidationError(), ToolInstallError(), BuildError()):
            assert isinstance(exc, PpaBuilderError)
            assert exc.exit_code == 1
