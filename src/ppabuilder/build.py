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

"""Signed source package build with debuild."""

from __future__ import annotations

import logging
from pathlib import Path

from ppabuilder.debpkg.changelog import get_changelog_version
from ppabuilder.exceptions import BuildError
from ppabuilder.models import BuildWorkspace, PackageSpec
from ppabuilder.run import activity, success
from ppabuilder.tools import run_command

logger = logging.getLogger(__name__)

# Answers fed to debuild's confirmation prompts, like piping `yes` into it
AUTO_CONFIRM = "y\n" * 64


def debuild_command(gpg_key: str | None = None) -> list[str]:
    cmd = ["debuild", "-S", "-sa"]
    if gpg_key:
        cmd.append(f"-k{gpg_key}")
    return cmd


def changes_path(workspace: BuildWorkspace, package: PackageSpec, revision: str = "1") -> Path:
    """Return where debuild writes the _source.changes file.

    The version comes from debian/changelog when the workspace has one.
    """
    changelog = workspace.debian_dir / "changelog"
    version = get_changelog_version(changelog) if changelog.is_file() else ""
    version = version or f"{package.version}-{revision}"
    return workspace.root / f"{package.name}_{version}_source.changes"


def build_source_package(
    workspace: BuildWorkspace,
    package: PackageSpec,
    gpg_key: str | None = None,
    revision: str = "1",
    assume_yes: bool = True,
) -> Path:
    """Build and sign the source package inside the workspace.

    With ``assume_yes`` every debuild confirmation is answered with "y";
    otherwise debuild reads its answers from the terminal.

    Returns:
        Path of the ``_source.changes`` file debuild should have produced.

    Raises:
        BuildError: If debuild exits non-zero.
    """
    activity("build", "Building source package...")
    answers = AUTO_CONFIRM if assume_yes else None
    result = run_command(debuild_command(gpg_key), cwd=workspace.path, input_text=answers)
    if result.returncode != 0:
        raise BuildError(message="Package build failed", returncode=result.returncode)

    changes = changes_path(workspace, package, revision)
    if not changes.exists():
        logger.warning("Expected changes file not found: %s", changes)
    success("build", f"Source package built: {changes.name}")
    return changes
