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

"""Records passed between pipeline stages.

Attributes are plain strings and paths; none of these objects talk to the
outside world themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class MaintainerProfile:
    """Maintainer identity, persisted between runs.

    Attributes:
        name: Full name used in Maintainer and changelog lines.
        email: Contact address, also used to find a freshly generated key.
        launchpad_username: Launchpad account owning the PPA and repository.
        gpg_key: Long key ID used for signing, if one has been chosen.
    """

    name: str
    email: str
    launchpad_username: str
    gpg_key: str | None = None

    @property
    def identity(self) -> str:
        """Return ``Name <email>`` as used by Debian metadata."""
        return f"{self.name} <{self.email}>"


@dataclass
class PackageSpec:
    """Package described by the user for this run.

    Attributes:
        name: Source and binary package name.
        version: Upstream version in MAJOR.MINOR.PATCH form.
        description: One-line synopsis for the binary stanza.
        dependencies: Build dependencies detected for the package.
    """

    name: str
    version: str
    description: str
    dependencies: list[str] = field(default_factory=list)

    @property
    def dirname(self) -> str:
        return f"{self.name}-{self.version}"

    @property
    def tarball_name(self) -> str:
        return f"{self.name}_{self.version}.orig.tar.gz"

    def add_dependencies(self, packages: list[str]) -> None:
        """Append packages not already present, keeping first-seen order."""
        for pkg in packages:
            if pkg not in self.dependencies:
                self.dependencies.append(pkg)


@dataclass
class BuildWorkspace:
    """Transient build tree for one package version.

    Attributes:
        root: Shared build root holding every workspace and its artifacts.
        path: ``<root>/<name>-<version>`` copy of the source tree.
        tarball: Source archive created next to the workspace.
    """

    root: Path
    path: Path
    tarball: Path | None = None

    @property
    def debian_dir(self) -> Path:
        return self.path / "debian"
