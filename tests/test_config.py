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

"""Tests for ppabuilder.config module."""

from __future__ import annotations

from pathlib import Path

import yaml

from ppabuilder import config


class TestDefaultConfig:
    """Tests for DEFAULT_CONFIG structure."""

    def test_default_config_has_required_sections(self) -> None:
        for section in ("paths", "launchpad", "gpg", "packaging", "behavior"):
            assert section in config.DEFAULT_CONFIG

    def test_default_build_root(self) -> None:
        assert config.DEFAULT_CONFIG["paths"]["build_root"] == "/tmp/ppa_build"

    def test_default_packaging_values(self) -> None:
        packaging = config.DEFAULT_CONFIG["packaging"]
        assert packaging["compat"] == 13
        assert packaging["source_format"] == "3.0 (native)"
        assert packaging["urgency"] == "medium"


class TestEnsureConfigExists:
    def test_creates_config_file_with_defaults(self, temp_home: Path) -> None:
        config_file = temp_home / ".config" / "ppa_builder" / "settings.yaml"
        assert not config_file.exists()

        config.ensure_config_exists()

        assert config_file.exists()
        content = yaml.safe_load(config_file.read_text())
        assert "paths" in content
        assert "launchpad" in content

    def test_does_not_overwrite_existing_config(self, temp_home: Path) -> None:
        config_file = config.get_config_path()
        config_file.parent.mkdir(parents=True)
        config_file.write_text("# custom\n")

        config.ensure_config_exists()

        assert config_file.read_text() == "# custom\n"


class TestLoadConfig:
    def test_expands_tilde_in_paths(self, temp_home: Path) -> None:
        cfg = config.load_config()

        for key, value in cfg["paths"].items():
            assert "~" not in value, f"Path {key} was not expanded: {value}"
        assert cfg["paths"]["profile"] == str(temp_home / ".config" / "ppa_builder" / "config")

    def test_merges_custom_config_with_defaults(self, temp_home: Path) -> None:
        config_file = config.get_config_path()
        config_file.parent.mkdir(parents=True)
        config_file.write_text("launchpad:\n  ppa_host: ppa.example.test\n")

        cfg = config.load_config()

        assert cfg["launchpad"]["ppa_host"] == "ppa.example.test"
        assert cfg["launchpad"]["git_host"] == "git.launchpad.net"
        assert cfg["paths"]["build_root"] == "/tmp/ppa_build"

    def test_handles_empty_config_file(self, temp_home: Path) -> None:
        config_file = config.get_config_path()
        config_file.parent.mkdir(parents=True)
        config_file.write_text("")

        cfg = config.load_config()

        assert cfg["gpg"]["keyserver"] == "keyserver.ubuntu.com"

    def test_handles_invalid_yaml(self, temp_home: Path) -> None:
        config_file = config.get_config_path()
        config_file.parent.mkdir(parents=True)
        config_file.write_text("paths: [unclosed\n")

        cfg = config.load_config()

        assert cfg["packaging"]["section"] == "utils"

    def test_does_not_mutate_defaults(self, temp_home: Path) -> None:
        cfg = config.load_config()
        cfg["paths"]["build_root"] = "/elsewhere"

        assert config.DEFAULT_CONFIG["paths"]["build_root"] == "/tmp/ppa_build"


class TestWriteConfig:
    def test_round_trips_through_load(self, temp_home: Path) -> None:
        data = config.load_config()
        data["packaging"]["distribution"] = "noble"

        config.write_config(data)

        assert config.load_config()["packaging"]["distribution"] == "noble"
