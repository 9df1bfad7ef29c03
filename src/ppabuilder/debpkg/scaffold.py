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

"""Creation of the debian/ directory for a native source package.

Writes control, rules, compat, changelog and source/format. Existing files
with the same names are overwritten.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ppabuilder.debpkg.changelog import ChangelogEntry, rfc2822_date
from ppabuilder.debpkg.control import ControlDocument
from ppabuilder.debpkg.rules import RulesScript
from ppabuilder.launchpad import ppa_page_url
from ppabuilder.models import MaintainerProfile, PackageSpec

logger = logging.getLogger(__name__)


def debian_version(package: PackageSpec, packaging: Mapping[str, Any]) -> str:
    return f"{package.version}-{packaging.get('debian_revision', '1')}"


def build_control(
    package: PackageSpec,
    profile: MaintainerProfile,
    settings: Mapping[str, Any],
) -> ControlDocument:
    packaging = settings.get("packaging", {})
    web_root = settings.get("launchpad", {}).get("web_root", "https://launchpad.net")
    return ControlDocument(
        source=package.name,
        maintainer=profile.identity,
        description=package.description,
        homepage=ppa_page_url(profile.launchpad_username, "ppa", web_root=web_root),
        section=packaging.get("section", "utils"),
        priority=packaging.get("priority", "optional"),
        standards_version=str(packaging.get("standards_version", "4.5.1")),
    )


def build_changelog(
    package: PackageSpec,
    profile: MaintainerProfile,
    settings: Mapping[str, Any],
    now: datetime.datetime | None = None,
) -> ChangelogEntry:
    packaging = settings.get("packaging", {})
    return ChangelogEntry(
        package=package.name,
        version=debian_version(package, packaging),
        author=profile.identity,
        distribution=packaging.get("distribution", "unstable"),
        urgency=packaging.get("urgency", "medium"),
        date=rfc2822_date(now),
    )


def create_debian_dir(
    dest: Path,
    package: PackageSpec,
    profile: MaintainerProfile,
    settings: Mapping[str, Any],
    now: datetime.datetime | None = None,
) -> Path:
    """Write the debian/ metadata for ``package`` under ``dest``.

    Args:
        dest: Root of the source tree that receives ``debian/``.
        package: Package being built.
        profile: Maintainer used in control and changelog.
        settings: Loaded settings; the ``packaging`` section supplies
            section, priority, compat level and source format.
        now: Changelog timestamp, defaults to the current time.

    Returns:
        Path to the debian/ directory.
    """
    packaging = settings.get("packaging", {})
    debian_dir = dest / "debian"
    (debian_dir / "source").mkdir(parents=True, exist_ok=True)

    control = build_control(package, profile, settings)
    (debian_dir / "control").write_text(control.render(), encoding="utf-8")

    RulesScript().write(debian_dir / "rules")

    (debian_dir / "compat").write_text(f"{packaging.get('compat', 13)}\n", encoding="utf-8")

    changelog = build_changelog(package, profile, settings, now)
    (debian_dir / "changelog").write_text(changelog.render(), encoding="utf-8")

    (debian_dir / "source" / "format").write_text(
        f"{packaging.get('source_format', '3.0 (native)')}\n", encoding="utf-8"
    )

    logger.info("Created debian/ for %s %s in %s", package.name, package.version, dest)
    return debian_dir
