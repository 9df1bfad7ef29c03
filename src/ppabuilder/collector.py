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

"""Interactive collection of maintainer, source and package details.

Invalid answers re-prompt, except package name and version which abort
the run with a ValidationError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ppabuilder.exceptions import ValidationError
from ppabuilder.models import MaintainerProfile, PackageSpec
from ppabuilder.profile import format_profile, load_profile, save_profile
from ppabuilder.prompts import InputProvider
from ppabuilder.run import activity, detail, failure, success, warning
from ppabuilder.validation import is_valid_email, require_package_name, require_version

logger = logging.getLogger(__name__)

BUILD_FILES = ("Makefile", "CMakeLists.txt")


def _prompt_until(provider: InputProvider, text: str, check: Callable[[str], bool], error: str) -> str:
    while True:
        answer = provider.prompt(text)
        if check(answer):
            return answer
        failure("user", error)


def prompt_maintainer(provider: InputProvider, gpg_key: str | None = None) -> MaintainerProfile:
    activity("user", "Please enter your information:")
    name = _prompt_until(provider, "Full Name", bool, "Name cannot be empty")
    email = _prompt_until(
        provider,
        "Email Address",
        is_valid_email,
        "Invalid email format. Please use format: user@domain.com",
    )
    username = _prompt_until(provider, "Launchpad Username", bool, "Launchpad username cannot be empty")
    return MaintainerProfile(name=name, email=email, launchpad_username=username, gpg_key=gpg_key)


def collect_maintainer(provider: InputProvider, profile_path: Path) -> MaintainerProfile:
    """Return the maintainer profile, reusing the saved one if accepted.

    A freshly entered profile is saved immediately.

    Raises:
        ValidationError: If the reused profile has an invalid email.
    """
    saved = load_profile(profile_path)
    if saved is not None:
        activity("user", "Loading saved configuration...")
        for line in format_profile(saved):
            detail(line)
        if provider.confirm("Would you like to use this configuration?", default=True):
            if not is_valid_email(saved.email):
                raise ValidationError(
                    message=f"Saved configuration has an invalid email: {saved.email}",
                    value=saved.email,
                )
            return saved

    profile = prompt_maintainer(provider, gpg_key=saved.gpg_key if saved else None)
    save_profile(profile, profile_path)
    success("user", "Configuration saved")
    return profile


def resolve_source_dir(answer: str, cwd: Path) -> Path:
    """Make ``answer`` absolute against ``cwd`` and normalise it."""
    path = Path(answer).expanduser()
    if not path.is_absolute():
        path = cwd / path
    return path.resolve()


def collect_source_dir(provider: InputProvider, cwd: Path) -> Path:
    """Prompt until an existing directory is given."""
    activity("source", "Source Directory Setup")
    while True:
        answer = provider.prompt("Enter the source directory path")
        if not answer:
            continue
        source_dir = resolve_source_dir(answer, cwd)
        if source_dir.is_dir():
            return source_dir
        failure("source", f"Directory does not exist: {source_dir}")


def inspect_source(source_dir: Path) -> list[str]:
    """Report recognised build files and list the directory contents.

    Returns the names of the build files found.
    """
    activity("source", f"Validating source directory: {source_dir}")
    activity("source", "Checking for build system files...")
    found = [name for name in BUILD_FILES if (source_dir / name).is_file()]
    for name in found:
        success("source", f"Found {name}")
    if not found:
        warning(
            "source",
            "No Makefile or CMakeLists.txt found. You'll need to specify build instructions.",
        )

    activity("source", "Source directory contents:")
    for entry in sorted(source_dir.iterdir()):
        suffix = "/" if entry.is_dir() else ""
        detail(f"  {entry.name}{suffix}")
    return found


def collect_package(provider: InputProvider) -> PackageSpec:
    """Prompt for the package fields.

    Raises:
        ValidationError: If the name or version is invalid.
    """
    activity("package", "Please enter package information:")
    name = provider.prompt("Package name (lowercase, no spaces)")
    version = provider.prompt("Package version (e.g., 1.0.0)")
    description = provider.prompt("Package description")

    require_package_name(name)
    require_version(version)
    return PackageSpec(name=name, version=version, description=description)


def confirm_registration(provider: InputProvider) -> bool:
    return provider.confirm("Would you like to add this PPA to your system?", default=True)
