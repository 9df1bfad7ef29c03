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

"""Run context manager for PPA Builder runs.

This module implements the run directory creation, JSONL event logging,
a file handler for the ``ppabuilder`` logger and summary.json generation.
stdout is left attached to the terminal because most stages prompt the
user; status lines are written to sys.__stdout__ with colors.
"""

from __future__ import annotations

import contextlib
import datetime
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any

from rich.console import Console

from ppabuilder.config import load_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RunContext:
    """Context manager that creates a run directory and records the run.

    Usage:
        with RunContext("run") as run:
            run.log_event({"event": "stage.start"})
            ...
    """

    def __init__(self, command: str, cfg: dict[str, Any] | None = None) -> None:
        self.command = command
        self.cfg = cfg if cfg is not None else load_config()
        paths = self.cfg.get("paths", {})
        self.runs_root = Path(paths.get("runs_root", Path.home() / ".cache" / "ppabuilder" / "runs")).expanduser()
        now_utc = datetime.datetime.now(datetime.timezone.utc)
        self.run_id = now_utc.strftime("%Y%m%dT%H%M%SZ") + f"-{command}-" + uuid.uuid4().hex[:8]
        self.run_path = self.runs_root / self.run_id
        self.logs_path = self.run_path / "logs"
        self.events_file: Any | None = None
        self._log_handler: logging.Handler | None = None
        self.summary: dict[str, Any] = {"command": command, "start_utc": now_utc.isoformat()}

    def __enter__(self) -> RunContext:
        self.logs_path.mkdir(parents=True, exist_ok=True)
        self.events_file = (self.logs_path / "events.jsonl").open("a", encoding="utf-8")

        handler = logging.FileHandler(self.logs_path / "ppabuilder.log", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger = logging.getLogger("ppabuilder")
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        self._log_handler = handler

        self.log_event({"event": "run.start", "run_id": self.run_id})
        return self

    def log_event(self, event: dict[str, Any]) -> None:
        """Write a JSONL event with a timestamp."""
        if self.events_file is None:  # pragma: no cover
            return
        payload = {"timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(), **event}
        self.events_file.write(json.dumps(payload, default=str) + "\n")
        self.events_file.flush()

    def write_summary(self, **kwargs: Any) -> None:
        self.summary.update(kwargs)
        (self.run_path / "summary.json").write_text(json.dumps(self.summary, indent=2, default=str))

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: object,
    ) -> bool | None:
        status = self.summary.get("status", "success")
        if exc is not None:
            status = "failed"
            self.summary["error"] = str(exc)

        self.summary["end_utc"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
        self.summary["status"] = status
        self.write_summary()

        with contextlib.suppress(Exception):
            self.log_event({"event": "run.end", "status": status})

        try:
            if self.events_file:
                self.events_file.close()
        finally:
            if self._log_handler is not None:
                logging.getLogger("ppabuilder").removeHandler(self._log_handler)
                self._log_handler.close()

        if status != "success":
            with contextlib.suppress(Exception):
                print(f"[report] Logs: {self.run_path}", file=sys.__stdout__)

        return None


# Status lines always go to the real terminal (sys.__stdout__) so they stay
# visible even when a test harness or caller captures sys.stdout.

def _emit(text: str, style: str) -> None:
    with contextlib.suppress(Exception):
        console = Console(file=sys.__stdout__, highlight=False)
        console.print(text, style=style, markup=False)


def activity(phase: str, description: str) -> None:
    _emit(f"[{phase}] {description}", "blue")


def success(phase: str, description: str) -> None:
    _emit(f"[{phase}] {description}", "green")


def warning(phase: str, description: str) -> None:
    _emit(f"[{phase}] Warning: {description}", "yellow")


def failure(phase: str, description: str) -> None:
    _emit(f"[{phase}] ERROR: {description}", "bold red")


def detail(text: str) -> None:
    """Print an unprefixed, uncolored line (instructions, listings)."""
    _emit(text, "")


if __name__ == "__main__":
    with RunContext("smoke") as r:
        activity("test", "running smoke test")
        r.log_event({"msg": "hello"})
