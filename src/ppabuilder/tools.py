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

"""Host tool detection, command execution and package installation.

All external commands go through :func:`run_command`, which blocks until
the tool exits. Installation helpers escalate with ``sudo`` when the
process is not already running as root.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from ppabuilder.exceptions import ToolInstallError
from ppabuilder.run import activity, success

logger = logging.getLogger(__name__)

# Host packages needed before any stage can run
REQUIRED_PACKAGES = [
    "build-essential",
    "debhelper",
    "devscripts",
    "dput",
    "gnupg",
    "ubuntu-dev-tools",
]

# Package providing each helper tool installed on demand
TOOL_PACKAGES: dict[str, str] = {
    "git": "git",
    "mk-build-deps": "devscripts",
    "equivs-build": "equivs",
    "add-apt-repository": "software-properties-common",
    "debuild": "devscripts",
    "dput": "dput",
    "gpg": "gnupg",
}


@dataclass
class PackageCheck:
    """Result of checking host packages."""

    installed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def is_complete(self) -> bool:
        return len(self.missing) == 0


def find_tool(name: str) -> Path | None:
    """Find an executable tool in PATH."""
    path = shutil.which(name)
    if path:
        return Path(path)
    return None


def is_root() -> bool:
    return os.geteuid() == 0


def privileged(cmd: list[str]) -> list[str]:
    """Prefix ``cmd`` with sudo unless already running as root."""
    if is_root():
        return list(cmd)
    return ["sudo", *cmd]


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    input_text: str | None = None,
    capture: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run ``cmd`` synchronously and return the completed process.

    Output streams to the terminal unless ``capture`` is set. The return
    code is not checked; callers decide whether a failure is fatal.
    """
    logger.info("Running: %s%s", shlex.join(cmd), f" (cwd={cwd})" if cwd else "")
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            input=input_text,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        logger.error("Command not found: %s", cmd[0])
        return subprocess.CompletedProcess(cmd, 127, "", f"{cmd[0]}: command not found")
    logger.debug("Exit status %d for %s", result.returncode, cmd[0])
    return result


def is_package_installed(package: str) -> bool:
    """Return True if dpkg reports ``package`` as installed."""
    result = run_command(["dpkg-query", "-W", "-f=${Status}", package], capture=True)
    return result.returncode == 0 and result.stdout.strip().endswith("install ok installed")


def check_packages(packages: list[str]) -> PackageCheck:
    check = PackageCheck()
    for package in packages:
        if is_package_installed(package):
            check.installed.append(package)
        else:
            check.missing.append(package)
    return check


def apt_install(packages: list[str], update: bool = True) -> None:
    """Install packages with apt-get, refreshing the index first.

    Raises:
        ToolInstallError: If the index refresh or the install fails.
    """
    if not packages:
        return
    if not is_root():
        activity("deps", "Requesting sudo privileges to install packages...")
    if update and run_command(privileged(["apt-get", "update"])).returncode != 0:
        raise ToolInstallError(message="Failed to update package lists", packages=list(packages))
    if run_command(privileged(["apt-get", "install", "-y", *packages])).returncode != 0:
        raise ToolInstallError(
            message=f"Failed to install packages: {' '.join(packages)}",
            packages=list(packages),
        )


def check_dependencies(packages: list[str] | None = None) -> PackageCheck:
    """Install any missing host packages needed by the pipeline."""
    packages = REQUIRED_PACKAGES if packages is None else packages
    activity("deps", "Checking required packages...")
    check = check_packages(packages)
    if check.is_complete():
        success("deps", "All required packages are already installed")
        return check

    activity("deps", f"Installing missing packages: {' '.join(check.missing)}")
    apt_install(check.missing)
    success("deps", "All required packages installed successfully")
    return check


def ensure_tool(tool: str, package: str | None = None) -> Path | None:
    """Install the package providing ``tool`` when it is not on PATH."""
    path = find_tool(tool)
    if path is not None:
        return path
    package = package or TOOL_PACKAGES.get(tool, tool)
    activity("deps", f"Installing {package}...")
    apt_install([package])
    return find_tool(tool)
