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

"""debian/control generation and Build-Depends handling using python-debian."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

# Suppress python3-apt warning - it's optional and not installable via pip
with warnings.catch_warnings():
    warnings.filterwarnings("ignore", message=".*python.*-apt.*")
    warnings.filterwarnings("ignore", message=".*apt_pkg.*")
    from debian.deb822 import Deb822

if TYPE_CHECKING:
    from collections.abc import Iterator

BASE_BUILD_DEPENDS = ["debhelper-compat (= 13)"]
BINARY_DEPENDS = "${shlibs:Depends}, ${misc:Depends}"
DEFAULT_LONG_DESCRIPTION = "A simple test project for demonstrating package creation."


def relation_name(relation: str) -> str:
    """Return the package name of a relation like ``foo (>= 1.0) [amd64]``."""
    name = relation.strip().split(" ", 1)[0].split("(", 1)[0]
    return name.split(":", 1)[0]


def merge_relations(base: list[str], extra: list[str]) -> list[str]:
    """Append ``extra`` relations whose package is not already in ``base``."""
    merged = list(base)
    seen = {relation_name(r) for r in merged}
    for relation in extra:
        name = relation_name(relation)
        if name and name not in seen:
            merged.append(relation.strip())
            seen.add(name)
    return merged


def split_relations(value: str) -> list[str]:
    return [r.strip() for r in value.replace("\n", " ").split(",") if r.strip()]


@dataclass
class ControlDocument:
    """The two stanzas of a single-binary debian/control file.

    Attributes:
        source: Source package name, reused as the binary package name.
        maintainer: ``Name <email>`` line.
        description: Synopsis line of the binary package.
        homepage: Homepage URL of the source stanza.
        build_depends: Build-Depends relations, baseline first.
        section: Archive section.
        priority: Package priority.
        standards_version: Debian Policy version the package claims.
        long_description: Extended description shown below the synopsis.
    """

    source: str
    maintainer: str
    description: str
    homepage: str
    build_depends: list[str] = field(default_factory=lambda: list(BASE_BUILD_DEPENDS))
    section: str = "utils"
    priority: str = "optional"
    standards_version: str = "4.5.1"
    long_description: str = DEFAULT_LONG_DESCRIPTION

    def source_paragraph(self) -> Deb822:
        para = Deb822()
        para["Source"] = self.source
        para["Section"] = self.section
        para["Priority"] = self.priority
        para["Maintainer"] = self.maintainer
        para["Build-Depends"] = ", ".join(self.build_depends)
        para["Standards-Version"] = self.standards_version
        para["Homepage"] = self.homepage
        return para

    def binary_paragraph(self) -> Deb822:
        para = Deb822()
        para["Package"] = self.source
        para["Architecture"] = "any"
        para["Depends"] = BINARY_DEPENDS
        long_lines = [f" {line}" if line.strip() else " ." for line in self.long_description.splitlines()]
        para["Description"] = "\n".join([self.description, *long_lines])
        return para

    def render(self) -> str:
        return self.source_paragraph().dump() + "\n" + self.binary_paragraph().dump()


def iter_control_paragraphs(control_path: Path) -> Iterator[Deb822]:
    """Iterate over paragraphs in a debian/control file."""
    with control_path.open(encoding="utf-8") as f:
        yield from Deb822.iter_paragraphs(f, use_apt_pkg=False)


def parse_build_depends(control_path: Path) -> list[str]:
    """Return the Build-Depends relations of the source stanza."""
    for para in iter_control_paragraphs(control_path):
        return split_relations(para.get("Build-Depends", ""))
    raise ValueError(f"Empty or invalid control file: {control_path}")


def merge_build_depends(control_path: Path, packages: list[str]) -> list[str]:
    """Add ``packages`` to the Build-Depends of an existing control file.

    Relations already present are kept in place; new ones are appended in
    the order given. Returns the resulting relation list.
    """
    paragraphs = list(iter_control_paragraphs(control_path))
    if not paragraphs:
        raise ValueError(f"Empty or invalid control file: {control_path}")

    source = paragraphs[0]
    merged = merge_relations(split_relations(source.get("Build-Depends", "")), packages)
    source["Build-Depends"] = ", ".join(merged)
    control_path.write_text("\n".join(p.dump() for p in paragraphs), encoding="utf-8")
    return merged
