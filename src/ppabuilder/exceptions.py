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

"""PPA Builder exception types with associated exit codes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PpaBuilderError(Exception):
    """Base class for PPA Builder errors with an exit code."""

    message: str = "An error occurred"
    exit_code: int = field(default=1)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass
class ValidationError(PpaBuilderError):
    """Raised when a package name, version or saved profile is invalid."""

    value: str = ""


@dataclass
class SourceDirectoryError(PpaBuilderError):
    path: str = ""


@dataclass
class ToolInstallError(PpaBuilderError):
    """Raised when host packages or helper tools cannot be installed."""

    packages: list[str] = field(default_factory=list)


@dataclass
class SigningKeyError(PpaBuilderError):
    pass


@dataclass
class BuildError(PpaBuilderError):
    """Raised when the workspace or source package cannot be produced."""

    returncode: int | None = None


@dataclass
class InputExhaustedError(PpaBuilderError):
    """Raised by a scripted input provider that has no answers left."""

    question: str = ""
