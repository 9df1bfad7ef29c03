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

"""TTY-aware spinner for quiet, non-interactive work.

Uses Rich spinners when stdout is a TTY, falls back to plain text otherwise.
Never wrap a stage that prompts the user or streams tool output: the live
display would fight with it.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.text import Text

from ppabuilder.run import activity


def is_tty() -> bool:
    """Return True if stdout is a TTY."""
    try:
        if sys.__stdout__ is None:
            return False  # pragma: no cover
        return sys.__stdout__.isatty()
    except Exception:  # pragma: no cover
        return False


@contextlib.contextmanager
def activity_spinner(phase: str, description: str, disable: bool = False) -> Iterator[None]:
    """Context manager that shows a spinner while the wrapped block runs.

    Args:
        phase: Short phase label (e.g., "workspace", "vcs").
        description: Human-readable description of current activity.
        disable: Force disable spinner even on TTY.
    """
    if disable or not is_tty():
        activity(phase, description)
        yield
        return

    console = Console(file=sys.__stdout__, force_terminal=True)
    spinner = Spinner("dots", text=Text(f"[{phase}] {description}"))
    with Live(spinner, console=console, refresh_per_second=12, transient=True):
        yield

    activity(phase, description)
