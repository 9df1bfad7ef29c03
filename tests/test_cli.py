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

"""Tests for ppabuilder CLI module."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from ppabuilder.cli import app

runner = CliRunner()


class TestCliHelp:
    """Tests for CLI help output."""

    def test_main_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_run_help(self) -> None:
        result = runner.invoke(app, ["run", "--help"])
        assert result.exit_code == 0
        assert "upload" in result.output.lower()


class TestRunCommand:
    def test_exit_code_from_pipeline(self, temp_home: Path) -> None:
        with mock.patch("ppabuilder.cli.run_pipeline", return_value=1) as run_pipeline:
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        ctx = run_pipeline.call_args.args[0]
        assert ctx.run is not None
        assert ctx.settings["paths"]["build_root"] == "/tmp/ppa_build"

    def test_success(self, temp_home: Path) -> None:
        with mock.patch("ppabuilder.cli.run_pipeline", return_value=0):
            result = runner.invoke(app, ["run"])
        assert result.exit_code == 0


class TestImport:
    def test_imports_without_git_on_path(self, tmp_path: Path) -> None:
        empty_bin = tmp_path / "bin"
        empty_bin.mkdir()
        env = {k: v for k, v in os.environ.items() if not k.startswith("GIT_PYTHON")}
        env["PATH"] = str(empty_bin)
        env["PYTHONPATH"] = os.pathsep.join(p for p in sys.path if p)

        result = subprocess.run(
            [sys.executable, "-c", "import ppabuilder.cli"],
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )

        assert result.returncode == 0, result.stderr
