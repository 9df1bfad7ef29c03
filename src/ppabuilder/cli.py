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

"""CLI application definition for PPA Builder."""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from ppabuilder.config import load_config
from ppabuilder.pipeline import PipelineContext, run_pipeline
from ppabuilder.prompts import TyperInputProvider
from ppabuilder.run import RunContext

app: Typer = Typer(
    name="ppabuilder",
    help="Create a Debian source package and upload it to a Launchpad PPA.",
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    """Create a Debian source package and upload it to a Launchpad PPA."""
    # Keeps "run" as an explicit subcommand while it is the only one


@app.command(name="run")
def run() -> None:
    """Interactively build, sign and upload a source package.

    Prompts for the maintainer, signing key, source directory and package
    details, then builds the package, mirrors it to Launchpad Git and
    uploads it with dput.
    """
    cfg = load_config()
    with RunContext("run", cfg=cfg) as run_ctx:
        ctx = PipelineContext(settings=cfg, provider=TyperInputProvider(), run=run_ctx, cwd=Path.cwd())
        exit_code = run_pipeline(ctx)
    raise typer.Exit(code=exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
