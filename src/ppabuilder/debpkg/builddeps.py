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

"""Installation of a package's build dependencies.

The Build-Depends of debian/control are wrapped into an equivs control
file; installing the resulting metapackage through apt-get pulls in
every dependency.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ppabuilder.debpkg.control import parse_build_depends
from ppabuilder.exceptions import ToolInstallError
from ppabuilder.run import activity, detail, success
from ppabuilder.tools import apt_install, find_tool, privileged, run_command

logger = logging.getLogger(__name__)

BASIC_BUILD_PACKAGES = ["build-essential", "cmake"]
HELPER_PACKAGES = ["devscripts", "equivs"]


def render_equivs_control(package_name: str, build_depends: list[str]) -> str:
    return "\n".join(
        [
            f"Package: {package_name}-build-deps",
            f"Source: {package_name}-build-deps",
            "Version: 1.0",
            "Architecture: all",
            f"Depends: {', '.join(build_depends)}",
            f"Description: Build dependencies for {package_name}",
            "",
        ]
    )


def install_build_deps(source_dir: Path, package_name: str) -> list[str]:
    """Install the Build-Depends declared in ``source_dir/debian/control``.

    Returns:
        The Build-Depends relations that were installed.

    Raises:
        ToolInstallError: If the control file is missing or any install
            step fails.
    """
    control_path = source_dir / "debian" / "control"
    if not control_path.is_file():
        raise ToolInstallError(message="debian/control file not found")

    activity("build-deps", "Installing build dependencies...")

    if find_tool("mk-build-deps") is None:
        activity("build-deps", "Installing devscripts and equivs...")
        detail("This will require sudo access to install packages.")
        apt_install(HELPER_PACKAGES, update=False)

    activity("build-deps", "Installing basic build dependencies...")
    apt_install(BASIC_BUILD_PACKAGES, update=False)

    build_depends = parse_build_depends(control_path)
    if not build_depends:
        activity("build-deps", "No additional build dependencies found in control file")
        return []

    activity("build-deps", f"Found build dependencies: {', '.join(build_depends)}")
    detail("This will require sudo access to install packages.")

    with tempfile.TemporaryDirectory(prefix="ppabuilder-equivs-") as tmp:
        tmp_dir = Path(tmp)
        equivs_control = tmp_dir / "control"
        equivs_control.write_text(render_equivs_control(package_name, build_depends), encoding="utf-8")

        if run_command(["equivs-build", str(equivs_control)], cwd=tmp_dir).returncode != 0:
            raise ToolInstallError(
                message="Failed to create build dependencies package",
                packages=build_depends,
            )

        debs = sorted(str(p) for p in tmp_dir.glob("*.deb"))
        if not debs:
            raise ToolInstallError(
                message="equivs-build produced no package",
                packages=build_depends,
            )
        if run_command(privileged(["apt-get", "install", "-y", *debs])).returncode != 0:
            raise ToolInstallError(
                message="Failed to install build dependencies package",
                packages=build_depends,
            )

    success("build-deps", "Build dependencies installed")
    return build_depends
