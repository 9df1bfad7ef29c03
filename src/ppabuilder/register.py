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

"""Registration of the PPA as a local apt source."""

from __future__ import annotations

import logging

from ppabuilder.exceptions import ToolInstallError
from ppabuilder.launchpad import ppa_reference
from ppabuilder.run import activity, detail, failure, success
from ppabuilder.tools import ensure_tool, privileged, run_command

logger = logging.getLogger(__name__)


def add_ppa_to_system(username: str, package_name: str) -> bool:
    """Add ``ppa:<username>/<package_name>`` and refresh the apt index.

    Returns False on any failure; nothing is rolled back.
    """
    activity("register", "Adding PPA to system sources...")
    try:
        ensure_tool("add-apt-repository", "software-properties-common")
    except ToolInstallError as e:
        failure("register", e.message)
        return False

    ppa = ppa_reference(username, package_name)
    activity("register", f"Adding PPA: {ppa}")
    if run_command(privileged(["add-apt-repository", "-y", ppa])).returncode != 0:
        failure("register", "Failed to add PPA")
        return False
    if run_command(privileged(["apt-get", "update"])).returncode != 0:
        failure("register", "Failed to update package lists")
        return False

    success("register", "PPA added successfully!")
    activity("register", "You can now install your package with:")
    detail(f"sudo apt-get install {package_name}")
    return True
