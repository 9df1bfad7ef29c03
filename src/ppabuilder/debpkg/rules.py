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

"""debian/rules generation.

The generated makefile hands every target to ``dh`` and only overrides
the configure step to request a release build.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path

RULES_MODE = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH


@dataclass
class RulesScript:
    """A dh-driven debian/rules file.

    Attributes:
        configure_args: Extra arguments passed to dh_auto_configure.
    """

    configure_args: list[str] = field(default_factory=lambda: ["-DCMAKE_BUILD_TYPE=Release"])

    def render(self) -> str:
        lines = [
            "#!/usr/bin/make -f",
            "%:",
            "\tdh $@",
        ]
        if self.configure_args:
            lines += [
                "",
                "override_dh_auto_configure:",
                f"\tdh_auto_configure -- {' '.join(self.configure_args)}",
            ]
        return "\n".join(lines) + "\n"

    def write(self, path: Path) -> Path:
        path.write_text(self.render(), encoding="utf-8")
        path.chmod(RULES_MODE)
        return path
