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

"""Tests for ppabuilder.upload module."""

from __future__ import annotations

import configparser
from pathlib import Path

from ppabuilder import upload


class TestWriteDputConfig:
    def test_ppa_stanza(self, tmp_path: Path) -> None:
        path = upload.write_dput_config(tmp_path / ".dput.cf", "jdoe", "hello-tool")

        parser = configparser.ConfigParser()
        parser.read(path)
        assert parser.sections() == ["ppa"]
        assert parser["ppa"]["fqdn"] == "ppa.launchpad.net"
        assert parser["ppa"]["method"] == "ftp"
        assert parser["ppa"]["incoming"] == "~jdoe/ubuntu/hello-tool/"
        assert parser["ppa"]["login"] == "anonymous"
        assert parser["ppa"]["allow_unsigned_uploads"] == "0"

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".dput.cf"
        path.write_text("[other]\nfqdn = example.test\n")

        upload.write_dput_config(path, "jdoe", "hello-tool", host="ppa.example.test")

        parser = configparser.ConfigParser()
        parser.read(path)
        assert parser.sections() == ["ppa"]
        assert parser["ppa"]["fqdn"] == "ppa.example.test"


class TestUploadPackage:
    def test_runs_dput_next_to_changes(self, commands, tmp_path: Path) -> None:
        changes = tmp_path / "hello-tool_1.2.3-1_source.changes"
        cfg = tmp_path / ".dput.cf"

        assert upload.upload_package(changes, cfg) is True

        assert commands.calls == [["dput", "-c", str(cfg), "ppa", changes.name]]
        assert commands.kwargs[0]["cwd"] == tmp_path

    def test_without_config_uses_dput_default(self, commands, tmp_path: Path) -> None:
        changes = tmp_path / "x_1.0.0-1_source.changes"
        upload.upload_package(changes)
        assert commands.calls == [["dput", "ppa", changes.name]]

    def test_failure_returns_false(self, commands, tmp_path: Path) -> None:
        commands.fail("dput")
        assert upload.upload_package(tmp_path / "x_1.0.0-1_source.changes") is False
