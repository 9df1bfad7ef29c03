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

"""Input validation for maintainer and package fields."""

from __future__ import annotations

import re

from ppabuilder.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PACKAGE_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")
VERSION_RE = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def is_valid_email(email: str) -> bool:
    """Return True for addresses shaped like ``user@domain.tld``."""
    return EMAIL_RE.fullmatch(email) is not None


def is_valid_package_name(name: str) -> bool:
    return PACKAGE_NAME_RE.fullmatch(name) is not None


def is_valid_version(version: str) -> bool:
    return VERSION_RE.fullmatch(version) is not None


def require_package_name(name: str) -> str:
    if not is_valid_package_name(name):
        raise ValidationError(
            message="Invalid package name. Use only lowercase letters, numbers, and hyphens.",
            value=name,
        )
    return name


def require_version(version: str) -> str:
    if not is_valid_version(version):
        raise ValidationError(
            message="Invalid version format. Use semantic versioning (e.g., 1.0.0)",
            value=version,
        )
    return version
