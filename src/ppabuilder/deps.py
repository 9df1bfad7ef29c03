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

"""Best-effort build dependency detection.

Only CMake projects are recognised. ``find_package`` calls naming a known
library add the matching development package; anything else is missed.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

CMAKE_FILE = "CMakeLists.txt"
DEPS_FILE = "deps"

CMAKE_BASELINE = ["cmake", "build-essential"]
DEFAULT_DEPENDENCIES = ["build-essential"]

# find_package marker -> development package
CMAKE_PACKAGE_MARKERS: dict[str, str] = {
    "GTK": "libgtk-3-dev",
    "Qt": "qtbase5-dev",
    "CURL": "libcurl4-openssl-dev",
    "SQLite": "libsqlite3-dev",
}


def _has_find_package(content: str, marker: str) -> bool:
    pattern = re.compile(rf"find_package.*{re.escape(marker)}")
    return any(pattern.search(line) for line in content.splitlines())


def analyze_dependencies(source_dir: Path) -> list[str]:
    """Return the sorted, de-duplicated build dependencies for ``source_dir``."""
    cmake_file = source_dir / CMAKE_FILE
    if not cmake_file.is_file():
        logger.info("No %s in %s, using basic dependencies", CMAKE_FILE, source_dir)
        return sorted(set(DEFAULT_DEPENDENCIES))

    try:
        content = cmake_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", cmake_file, e)
        content = ""

    detected = set(CMAKE_BASELINE)
    for marker, package in CMAKE_PACKAGE_MARKERS.items():
        if _has_find_package(content, marker):
            logger.debug("find_package(%s) -> %s", marker, package)
            detected.add(package)
    return sorted(detected)


def format_dependencies(deps: list[str]) -> str:
    return " ".join(sorted(set(deps)))


def write_dependencies(deps: list[str], debian_dir: Path) -> Path:
    """Store the space-joined dependency list as ``debian/deps``."""
    debian_dir.mkdir(parents=True, exist_ok=True)
    path = debian_dir / DEPS_FILE
    path.write_text(format_dependencies(deps) + "\n", encoding="utf-8")
    return path


def read_dependencies(debian_dir: Path) -> list[str]:
    path = debian_dir / DEPS_FILE
    if not path.is_file():
        return []
    return path.read_text(encoding="utf-8").split()
