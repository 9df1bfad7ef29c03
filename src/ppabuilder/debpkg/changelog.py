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

"""debian/changelog generation using python-debian."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from email.utils import format_datetime
from pathlib import Path

from debian.changelog import Changelog


def rfc2822_date(when: datetime.datetime | None = None) -> str:
    """Format ``when`` (default: now, local time) like ``date -R``."""
    if when is None:
        when = datetime.datetime.now().astimezone()
    elif when.tzinfo is None:
        when = when.astimezone()
    return format_datetime(when)


@dataclass
class ChangelogEntry:
    """A single debian/changelog block.

    Attributes:
        package: Source package name.
        version: Full Debian version, including the revision.
        author: ``Name <email>`` of the maintainer.
        changes: Bullet texts, without the leading ``*``.
        distribution: Target distribution.
        urgency: Upload urgency.
        date: RFC 2822 timestamp; filled in with the current time if empty.
    """

    package: str
    version: str
    author: str
    changes: list[str] = field(default_factory=lambda: ["Initial release"])
    distribution: str = "unstable"
    urgency: str = "medium"
    date: str = ""

    def to_changelog(self) -> Changelog:
        changelog = Changelog()
        changelog.new_block(
            package=self.package,
            version=self.version,
            distributions=self.distribution,
            urgency=self.urgency,
            author=self.author,
            date=self.date or rfc2822_date(),
        )
        changelog.add_change("")
        for change in self.changes:
            changelog.add_change(f"  * {change}")
        changelog.add_change("")
        return changelog

    def render(self) -> str:
        return str(self.to_changelog())


def get_changelog_version(changelog_path: Path) -> str:
    """Extract the version from the first line of debian/changelog."""
    with changelog_path.open(encoding="utf-8") as f:
        first_line = f.readline()

    # Format: package (version) distribution; urgency=xxx
    match = re.match(r"^[^\s]+\s+\(([^)]+)\)", first_line)
    if match:
        return match.group(1)
    return ""
