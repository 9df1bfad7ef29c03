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

"""dput configuration and upload of the source package."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from ppabuilder.run import activity, failure, success
from ppabuilder.tools import run_command

logger = logging.getLogger(__name__)

DPUT_TARGET = "ppa"
DEFAULT_PPA_HOST = "ppa.launchpad.net"


def dput_stanza(username: str, package_name: str, host: str = DEFAULT_PPA_HOST) -> dict[str, str]:
    return {
        "fqdn": host,
        "method": "ftp",
        "incoming": f"~{username}/ubuntu/{package_name}/",
        "login": "anonymous",
        "allow_unsigned_uploads": "0",
    }


def write_dput_config(
    path: Path,
    username: str,
    package_name: str,
    host: str = DEFAULT_PPA_HOST,
) -> Path:
    """Write a dput.cf whose ``[ppa]`` target is this package's PPA.

    The file is replaced; any other targets it held are dropped.
    """
    parser = configparser.ConfigParser()
    parser[DPUT_TARGET] = dput_stanza(username, package_name, host)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)
    logger.info("Wrote dput configuration to %s", path)
    return path


def upload_package(changes: Path, config_path: Path | None = None) -> bool:
    """Upload ``changes`` with dput; returns False if dput fails."""
    activity("upload", "Uploading package to PPA...")
    cmd = ["dput"]
    if config_path is not None:
        cmd += ["-c", str(config_path)]
    cmd += [DPUT_TARGET, changes.name]
    if run_command(cmd, cwd=changes.parent).returncode != 0:
        failure("upload", f"dput failed for {changes.name}")
        return False
    success("upload", "Upload complete")
    return True
