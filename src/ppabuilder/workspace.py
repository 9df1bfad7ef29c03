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

"""Transient build workspace.

Layout under the build root (default /tmp/ppa_build)::

    <name>-<version>/              copy of the sources plus debian/
    <name>_<version>.orig.tar.gz   archive of the directory above

The workspace is recreated from scratch on every run and left in place
afterwards. Workspaces are not namespaced per run, so two concurrent runs
for the same name and version overwrite each other.
"""

from __future__ import annotations

import datetime
import logging
import shutil
import tarfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ppabuilder.debpkg.control import merge_build_depends
from ppabuilder.debpkg.scaffold import create_debian_dir
from ppabuilder.deps import analyze_dependencies, format_dependencies, write_dependencies
from ppabuilder.exceptions import BuildError, SourceDirectoryError
from ppabuilder.models import BuildWorkspace, MaintainerProfile, PackageSpec
from ppabuilder.run import activity, success
from ppabuilder.spinner import activity_spinner

logger = logging.getLogger(__name__)

DEFAULT_BUILD_ROOT = Path("/tmp/ppa_build")

# Version control metadata of the source is not carried into the copy
COPY_IGNORE = shutil.ignore_patterns(".git", ".bzr", ".hg", ".svn")


def workspace_path(build_root: Path, package: PackageSpec) -> Path:
    return build_root / package.dirname


def reset_workspace(path: Path) -> None:
    """Remove ``path`` if present so the next copy starts clean."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def copy_sources(source_dir: Path, dest: Path) -> None:
    if not source_dir.is_dir():
        raise SourceDirectoryError(message=f"Source directory does not exist: {source_dir}", path=str(source_dir))
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        shutil.copytree(source_dir, dest, symlinks=True, ignore=COPY_IGNORE)
    except OSError as e:
        raise BuildError(message=f"Failed to copy {source_dir} to {dest}: {e}") from e


def create_tarball(workspace: BuildWorkspace, package: PackageSpec) -> Path:
    """Archive the workspace directory into the build root."""
    tarball = workspace.root / package.tarball_name
    try:
        with tarfile.open(tarball, "w:gz") as tar:
            tar.add(workspace.path, arcname=workspace.path.name)
    except (OSError, tarfile.TarError) as e:
        raise BuildError(message=f"Failed to create {tarball.name}: {e}") from e
    return tarball


def build_workspace(
    source_dir: Path,
    package: PackageSpec,
    profile: MaintainerProfile,
    settings: Mapping[str, Any],
    now: datetime.datetime | None = None,
) -> BuildWorkspace:
    """Create the workspace, its debian/ metadata and the source tarball.

    Dependencies are detected from ``source_dir`` itself rather than the
    copy, recorded in ``debian/deps`` and merged into the copy's
    Build-Depends. ``package.dependencies`` is updated with the result.
    """
    build_root = Path(settings.get("paths", {}).get("build_root", DEFAULT_BUILD_ROOT))
    workspace = BuildWorkspace(root=build_root, path=workspace_path(build_root, package))

    activity("workspace", "Creating package structure...")
    reset_workspace(workspace.path)
    copy_sources(source_dir, workspace.path)
    logger.info("Copied %s to %s", source_dir, workspace.path)

    create_debian_dir(workspace.path, package, profile, settings, now=now)

    with activity_spinner("workspace", "Analyzing project dependencies..."):
        detected = analyze_dependencies(source_dir)
    write_dependencies(detected, workspace.debian_dir)
    if detected:
        activity("workspace", f"Detected dependencies: {format_dependencies(detected)}")
        merge_build_depends(workspace.debian_dir / "control", detected)
    else:
        activity("workspace", "No additional dependencies detected")
    package.add_dependencies(detected)

    with activity_spinner("workspace", f"Creating {package.tarball_name}"):
        workspace.tarball = create_tarball(workspace, package)

    success("workspace", "Package structure created successfully")
    return workspace
