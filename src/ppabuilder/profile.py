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

"""Maintainer profile storage.

The profile is a shell-sourceable ``KEY=value`` file so it can also be
read by ``source ~/.config/ppa_builder/config`` from shell scripts::

    MAINTAINER_NAME='Jane Doe'
    MAINTAINER_EMAIL=jane@example.com
    LAUNCHPAD_USERNAME=jdoe
    GPG_KEY=0123456789ABCDEF
"""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path

from ppabuilder.models import MaintainerProfile

logger = logging.getLogger(__name__)

PROFILE_MODE = 0o600

_FIELDS = {
    "MAINTAINER_NAME": "name",
    "MAINTAINER_EMAIL": "email",
    "LAUNCHPAD_USERNAME": "launchpad_username",
    "GPG_KEY": "gpg_key",
}


def default_profile_path() -> Path:
    return Path.home() / ".config" / "ppa_builder" / "config"


def parse_profile(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines using shell quoting rules.

    Blank lines, comments and lines without ``=`` are skipped.
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        try:
            parts = shlex.split(raw, comments=True)
        except ValueError:
            logger.warning("Skipping unparsable profile line for %s", key)
            continue
        values[key] = " ".join(parts)
    return values


def load_profile(path: Path | None = None) -> MaintainerProfile | None:
    """Load the saved maintainer profile.

    Returns None when the file does not exist.
    """
    path = path or default_profile_path()
    if not path.is_file():
        return None

    values = parse_profile(path.read_text(encoding="utf-8"))
    kwargs = {attr: values.get(key, "") for key, attr in _FIELDS.items()}
    kwargs["gpg_key"] = kwargs["gpg_key"] or None
    logger.debug("Loaded maintainer profile from %s", path)
    return MaintainerProfile(**kwargs)


def render_profile(profile: MaintainerProfile) -> str:
    lines = []
    for key, attr in _FIELDS.items():
        value = getattr(profile, attr) or ""
        lines.append(f"{key}={shlex.quote(value)}")
    return "\n".join(lines) + "\n"


def save_profile(profile: MaintainerProfile, path: Path | None = None) -> Path:
    """Write the profile readable by its owner only.

    The file is written to a sibling temporary path created with mode 0600
    and then renamed over the target.
    """
    path = path or default_profile_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")

    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PROFILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(render_profile(profile))
    os.chmod(tmp_path, PROFILE_MODE)
    os.replace(tmp_path, path)
    logger.info("Saved maintainer profile to %s", path)
    return path


def format_profile(profile: MaintainerProfile) -> list[str]:
    """Return the lines shown when offering to reuse a saved profile."""
    return [
        "Current configuration:",
        f"  Name: {profile.name}",
        f"  Email: {profile.email}",
        f"  Launchpad Username: {profile.launchpad_username}",
        f"  GPG Key: {profile.gpg_key or 'Not set'}",
    ]
