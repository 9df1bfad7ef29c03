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

"""Launchpad locations and the guided repository setup.

Launchpad projects and Git repositories are created by the user in the
web UI; this module prints what to create, waits, then pushes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ppabuilder.models import MaintainerProfile, PackageSpec
from ppabuilder.prompts import InputProvider
from ppabuilder.run import activity, detail, failure, success
from ppabuilder.vcs import add_remote, push

logger = logging.getLogger(__name__)

LAUNCHPAD_WEB = "https://launchpad.net"
LAUNCHPAD_CODE = "https://code.launchpad.net"
LAUNCHPAD_GIT_HOST = "git.launchpad.net"

PUSH_HINTS = [
    "1. You have uploaded your SSH key to Launchpad",
    "2. You have the correct permissions",
    "3. The repository name is correct",
]


def ppa_reference(username: str, ppa: str) -> str:
    """Return the ``ppa:user/name`` shorthand used by add-apt-repository."""
    return f"ppa:{username}/{ppa}"


def ppa_page_url(username: str, ppa: str, web_root: str = LAUNCHPAD_WEB) -> str:
    return f"{web_root}/~{username}/+archive/ubuntu/{ppa}"


def git_remote_url(username: str, package: str, git_host: str = LAUNCHPAD_GIT_HOST) -> str:
    return f"git+ssh://{username}@{git_host}/~{username}/{package}"


def code_url(username: str, package: str, code_root: str = LAUNCHPAD_CODE) -> str:
    return f"{code_root}/~{username}/{package}"


def new_project_url(web_root: str = LAUNCHPAD_WEB) -> str:
    return f"{web_root}/projects/+new"


def new_repository_url(package: str, code_root: str = LAUNCHPAD_CODE) -> str:
    return f"{code_root}/{package}/+git/+new"


def setup_remote(
    provider: InputProvider,
    repo_path: Path,
    profile: MaintainerProfile,
    package: PackageSpec,
    web_root: str = LAUNCHPAD_WEB,
    code_root: str = LAUNCHPAD_CODE,
    git_host: str = LAUNCHPAD_GIT_HOST,
) -> bool:
    """Guide the user through project creation, then push the mirror.

    Returns:
        True if the push succeeded. A failed push is reported, not retried.
    """
    activity("remote", "Setting up Launchpad repository...")

    activity("remote", "Creating project on Launchpad...")
    activity("remote", "Please visit:")
    detail(new_project_url(web_root))
    activity("remote", "And create a project with these details:")
    detail(f"Name: {package.name}")
    detail(f"Title: {package.description}")
    detail(f"Summary: {package.description}")
    provider.pause("Press Enter once you've created the project...")

    activity("remote", "Setting up Git repository on Launchpad...")
    activity("remote", "Please visit:")
    detail(new_repository_url(package.name, code_root))
    activity("remote", "And create a Git repository with these details:")
    detail(f"Repository name: {package.name}")
    provider.pause("Press Enter once you've created the repository...")

    url = git_remote_url(profile.launchpad_username, package.name, git_host)
    add_remote(repo_path, "origin", url)

    activity("remote", "Pushing to Launchpad...")
    if not push(repo_path, "origin"):
        failure("remote", "Failed to push to Launchpad")
        activity("remote", "Please ensure:")
        for hint in PUSH_HINTS:
            detail(hint)
        return False

    success("remote", "Repository setup complete!")
    activity("remote", "Your repository is available at:")
    detail(code_url(profile.launchpad_username, package.name, code_root))
    return True
