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

"""Tool-wide settings for PPA Builder.

Settings are stored as YAML next to the maintainer profile and cover
locations, Launchpad endpoints and the fixed packaging metadata values.
The maintainer identity itself is handled by :mod:`ppabuilder.profile`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        "build_root": "/tmp/ppa_build",
        "runs_root": "~/.cache/ppabuilder/runs",
        "profile": "~/.config/ppa_builder/config",
        "dput_config": "~/.dput.cf",
    },
    "launchpad": {
        "ppa_host": "ppa.launchpad.net",
        "git_host": "git.launchpad.net",
        "web_root": "https://launchpad.net",
        "code_root": "https://code.launchpad.net",
    },
    "gpg": {
        "keyserver": "keyserver.ubuntu.com",
    },
    "packaging": {
        "distribution": "unstable",
        "urgency": "medium",
        "section": "utils",
        "priority": "optional",
        "standards_version": "4.5.1",
        "compat": 13,
        "debian_revision": "1",
        "source_format": "3.0 (native)",
    },
    "behavior": {"assume_yes": True},
}


def get_config_path() -> Path:
    """Return the path to the settings file."""
    return Path.home() / ".config" / "ppa_builder" / "settings.yaml"


def ensure_config_exists() -> None:
    """Create the settings file with defaults if it does not exist."""
    cfg_path = get_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    if not cfg_path.exists():
        cfg_path.write_text(yaml.safe_dump(DEFAULT_CONFIG))


def load_config() -> dict[str, Any]:
    """Load settings from disk and merge them over DEFAULT_CONFIG.

    Sections are merged one level deep. Unreadable or empty YAML is treated
    as an empty mapping so a broken settings file never stops a run.
    """
    ensure_config_exists()
    cfg_path = get_config_path()
    try:
        raw = yaml.safe_load(cfg_path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        raw = {}
    if not isinstance(raw, dict):
        raw = {}

    merged: dict[str, Any] = {}
    for key, val in DEFAULT_CONFIG.items():
        if key in raw and isinstance(raw[key], dict):
            merged[key] = {**val, **raw[key]}
        elif isinstance(val, dict):
            merged[key] = dict(val)
        else:
            merged[key] = raw.get(key, val)

    for pkey, pval in merged.get("paths", {}).items():
        merged["paths"][pkey] = str(Path(str(pval)).expanduser())

    return merged


def write_config(data: dict[str, Any]) -> None:
    """Write the provided data as YAML to the settings path."""
    cfg_path = get_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(yaml.safe_dump(data))


if __name__ == "__main__":
    print(json.dumps(load_config(), indent=2))
