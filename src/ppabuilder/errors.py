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

"""Error and warning reporting helpers for pipeline stages.

Each helper prints a status line for the user and writes the matching
structured event to the run's events.jsonl, so the terminal output and the
machine-readable log never drift apart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ppabuilder.run import activity, failure, warning

if TYPE_CHECKING:
    from ppabuilder.run import RunContext

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def log_phase_event(
    run: RunContext | None,
    phase: str,
    message: str,
    event_key: str,
    **event_data: Any,
) -> None:
    """Log a phase activity message and structured event together.

    Example:
        log_phase_event(
            run, "workspace", f"Copied sources to {path}",
            "workspace.copied",
            path=str(path),
        )
    """
    activity(phase, message)
    if run is not None:
        run.log_event({"event": event_key, **event_data})


def phase_error(
    run: RunContext | None,
    phase: str,
    message: str,
    exit_code: int = EXIT_FAILURE,
    *,
    event_key: str | None = None,
    **event_data: Any,
) -> int:
    """Log a fatal phase error and write summary, returning the exit code.

    The event key defaults to "{phase}.error".
    """
    failure(phase, message)
    if run is not None:
        run.log_event(
            {
                "event": event_key or f"{phase}.error",
                "message": message,
                "exit_code": exit_code,
                **event_data,
            }
        )
        run.write_summary(status="failed", error=message, exit_code=exit_code, failed_phase=phase)
    return exit_code


def phase_warning(
    run: RunContext | None,
    phase: str,
    message: str,
    *,
    event_key: str | None = None,
    **event_data: Any,
) -> None:
    """Log a phase warning without affecting exit status."""
    warning(phase, message)
    if run is not None:
        run.log_event({"event": event_key or f"{phase}.warning", "message": message, **event_data})
