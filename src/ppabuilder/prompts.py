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

"""Input providers used by the interactive stages.

Stages never read from the terminal directly. They receive an
:class:`InputProvider`; the CLI passes :class:`TyperInputProvider`, tests
and unattended runs pass :class:`ScriptedInputProvider`.

Questions asked as ``(Y/n)`` treat an empty answer as yes. Confirmations
accept y, yes, n or no in any case; any other answer asks again, in both
providers.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Protocol

import typer

from ppabuilder.exceptions import InputExhaustedError

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"n", "no"}


class InputProvider(Protocol):
    def prompt(self, text: str, default: str = "") -> str:
        """Ask for a free-form answer; an empty reply returns ``default``."""

    def confirm(self, text: str, default: bool = True) -> bool:
        """Ask a yes/no question; an empty reply returns ``default``."""

    def pause(self, text: str) -> None:
        """Block until the user acknowledges ``text``."""


class TyperInputProvider:
    """Interactive provider reading from the terminal through typer."""

    def prompt(self, text: str, default: str = "") -> str:
        return str(typer.prompt(text, default=default, show_default=bool(default))).strip()

    def confirm(self, text: str, default: bool = True) -> bool:
        return typer.confirm(text, default=default)

    def pause(self, text: str) -> None:
        typer.prompt(text, default="", show_default=False, prompt_suffix=" ")


class ScriptedInputProvider:
    """Provider replaying a fixed list of answers.

    Each prompt, confirm or pause consumes one answer. An empty string
    selects the default, as pressing enter would. A confirmation answer
    other than y/yes/n/no is skipped and the next answer is used.

    Example:
        provider = ScriptedInputProvider(["", "mypkg", "1.0.0", "A tool", "n"])
    """

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers: deque[str] = deque(answers)
        self.asked: list[str] = []

    def _next(self, text: str) -> str:
        self.asked.append(text)
        if not self.answers:
            raise InputExhaustedError(message=f"No scripted answer for: {text}", question=text)
        answer = self.answers.popleft()
        logger.debug("Scripted answer for %r: %r", text, answer)
        return answer

    def prompt(self, text: str, default: str = "") -> str:
        answer = self._next(text).strip()
        return answer or default

    def confirm(self, text: str, default: bool = True) -> bool:
        while True:
            answer = self._next(text).strip().lower()
            if not answer:
                return default
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            logger.debug("Unrecognised answer %r, asking again", answer)

    def pause(self, text: str) -> None:
        self._next(text)
