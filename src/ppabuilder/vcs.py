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

"""Git mirror of the build workspace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ppabuilder.exceptions import BuildError
from ppabuilder.models import MaintainerProfile, PackageSpec
from ppabuilder.tools import ensure_tool

if TYPE_CHECKING:
    import git

logger = logging.getLogger(__name__)

# Build byproducts that must not end up in the mirror
GITIGNORE_PATTERNS = [
    "*.o",
    "*.so",
    "*.a",
    "*.deb",
    "*.changes",
    "*.build",
    "*.buildinfo",
    "*.dsc",
    "*.tar.gz",
    "*.tar.xz",
    "debian/.debhelper/",
    "debian/debhelper-build-stamp",
    "debian/files",
    "debian/*.substvars",
    "debian/*.log",
    "debian/{package}/",
    "debian/tmp/",
    "obj-*/",
]


def render_gitignore(package_name: str) -> str:
    return "\n".join(p.format(package=package_name) for p in GITIGNORE_PATTERNS) + "\n"


def commit_message(package: PackageSpec) -> str:
    return f"Initial commit for {package.name} {package.version}"


def init_repository(path: Path, profile: MaintainerProfile, package: PackageSpec) -> git.Repo:
    """Turn ``path`` into a Git repository holding one initial commit.

    The maintainer identity is written to the repository's own config so
    the user's global Git settings are left alone.

    Raises:
        BuildError: If git cannot be installed or the commit fails.
    """
    if ensure_tool("git") is None:
        raise BuildError(message="git is not available after installation")
    import git

    # Pick up a binary installed after GitPython was first imported
    git.refresh()

    try:
        repo = git.Repo.init(path)
        (path / ".gitignore").write_text(render_gitignore(package.name), encoding="utf-8")

        with repo.config_writer() as cw:
            cw.set_value("user", "name", profile.name)
            cw.set_value("user", "email", profile.email)

        repo.git.add("--all")
        repo.git.commit("-m", commit_message(package))
    except (git.GitCommandError, OSError) as e:
        raise BuildError(message=f"Failed to create Git repository: {e}") from e
    logger.info("Committed %s in %s", package.dirname, path)
    return repo


def add_remote(path: Path, name: str, url: str) -> git.Remote:
    """Add remote ``name``, or repoint it if it already exists."""
    import git

    repo = git.Repo(path)
    for remote in repo.remotes:
        if remote.name == name:
            remote.set_url(url)
            return remote
    return repo.create_remote(name, url)


def push(path: Path, remote: str = "origin") -> bool:
    """Push the current branch with upstream tracking.

    Returns False instead of raising when git reports an error.
    """
    import git

    repo = git.Repo(path)
    branch = repo.active_branch.name
    try:
        repo.git.push("-u", remote, branch)
    except git.GitCommandError as e:
        logger.warning("Push of %s to %s failed: %s", branch, remote, e)
        return False
    return True
