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

"""Stage sequencing for a PPA Builder run.

Each stage is a function taking the shared :class:`PipelineContext` and
returning a :class:`StepResult`. Stages report problems either by
returning a fatal or advisory result or by raising. A PpaBuilderError
keeps its message and exit code; any other exception is fatal with exit
code 1.

What happens next is decided by the policy of the step in the table, not
by the stage itself:

- ``Policy.ABORT``: a fatal result stops the run with its exit code;
  an advisory result is reported and the run continues.
- ``Policy.CONTINUE``: any failure is downgraded to a warning.

Stages run strictly in table order; there is no skipping or retrying.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ppabuilder.build import build_source_package
from ppabuilder.collector import (
    collect_maintainer,
    collect_package,
    collect_source_dir,
    confirm_registration,
    inspect_source,
)
from ppabuilder.debpkg.builddeps import install_build_deps
from ppabuilder.debpkg.scaffold import create_debian_dir
from ppabuilder.errors import EXIT_FAILURE, EXIT_SUCCESS, log_phase_event, phase_error, phase_warning
from ppabuilder.exceptions import PpaBuilderError
from ppabuilder.gpg import setup_gpg
from ppabuilder.launchpad import code_url, ppa_page_url, setup_remote
from ppabuilder.models import BuildWorkspace, MaintainerProfile, PackageSpec
from ppabuilder.profile import save_profile
from ppabuilder.prompts import InputProvider
from ppabuilder.register import add_ppa_to_system
from ppabuilder.run import RunContext, activity, detail, success
from ppabuilder.tools import check_dependencies
from ppabuilder.upload import upload_package, write_dput_config
from ppabuilder.vcs import init_repository
from ppabuilder.workspace import build_workspace

logger = logging.getLogger(__name__)


class StepStatus(enum.Enum):
    SUCCESS = "success"
    FATAL = "fatal"
    ADVISORY = "advisory"


class Policy(enum.Enum):
    ABORT = "abort"
    CONTINUE = "continue"


@dataclass
class StepResult:
    """Outcome of one pipeline stage."""

    status: StepStatus
    message: str = ""
    exit_code: int = EXIT_SUCCESS

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.SUCCESS

    @classmethod
    def success(cls, message: str = "") -> StepResult:
        return cls(StepStatus.SUCCESS, message)

    @classmethod
    def fatal(cls, message: str, exit_code: int = EXIT_FAILURE) -> StepResult:
        return cls(StepStatus.FATAL, message, exit_code)

    @classmethod
    def advisory(cls, message: str) -> StepResult:
        return cls(StepStatus.ADVISORY, message)


@dataclass
class PipelineContext:
    """State threaded through every stage of a run.

    Attributes:
        settings: Loaded settings mapping (see ppabuilder.config).
        provider: Source of answers to interactive questions.
        run: Run context for structured events, if any.
        cwd: Base for relative source paths and exported key files.
        profile: Maintainer profile once collected.
        package: Package description once collected.
        source_dir: Absolute source directory once collected.
        workspace: Build workspace once created.
        changes: Path of the built ``_source.changes`` file.
        register_ppa: Whether the user asked to add the PPA locally.
        warnings: Advisory messages collected during the run.
    """

    settings: dict[str, Any]
    provider: InputProvider
    run: RunContext | None = None
    cwd: Path = field(default_factory=Path.cwd)
    profile: MaintainerProfile | None = None
    package: PackageSpec | None = None
    source_dir: Path | None = None
    workspace: BuildWorkspace | None = None
    changes: Path | None = None
    register_ppa: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def profile_path(self) -> Path:
        return Path(self.settings["paths"]["profile"]).expanduser()

    @property
    def dput_config_path(self) -> Path:
        return Path(self.settings["paths"]["dput_config"]).expanduser()

    def section(self, name: str) -> dict[str, Any]:
        return self.settings.get(name, {})


StepFunc = Callable[[PipelineContext], StepResult]


@dataclass(frozen=True)
class Step:
    """Row of the step table."""

    name: str
    phase: str
    func: StepFunc
    policy: Policy = Policy.ABORT


def _require(value: Any, what: str) -> Any:
    if value is None:
        raise PpaBuilderError(message=f"Internal error: {what} not available yet")
    return value


def step_preflight(ctx: PipelineContext) -> StepResult:
    check_dependencies()
    return StepResult.success()


def step_maintainer(ctx: PipelineContext) -> StepResult:
    ctx.profile = collect_maintainer(ctx.provider, ctx.profile_path)
    return StepResult.success(ctx.profile.identity)


def step_gpg(ctx: PipelineContext) -> StepResult:
    profile: MaintainerProfile = _require(ctx.profile, "maintainer profile")
    keyserver = ctx.section("gpg").get("keyserver", "keyserver.ubuntu.com")
    key_id, changed = setup_gpg(ctx.provider, profile, export_dir=ctx.cwd, keyserver=keyserver)
    profile.gpg_key = key_id
    if changed:
        save_profile(profile, ctx.profile_path)
    return StepResult.success(key_id)


def step_source(ctx: PipelineContext) -> StepResult:
    ctx.source_dir = collect_source_dir(ctx.provider, ctx.cwd)
    inspect_source(ctx.source_dir)
    return StepResult.success(str(ctx.source_dir))


def step_package(ctx: PipelineContext) -> StepResult:
    ctx.package = collect_package(ctx.provider)
    return StepResult.success(f"{ctx.package.name} {ctx.package.version}")


def step_scaffold(ctx: PipelineContext) -> StepResult:
    source_dir: Path = _require(ctx.source_dir, "source directory")
    activity("scaffold", "Creating debian directory structure...")
    create_debian_dir(
        source_dir,
        _require(ctx.package, "package"),
        _require(ctx.profile, "maintainer profile"),
        ctx.settings,
    )
    success("scaffold", "Debian directory structure created successfully")
    return StepResult.success()


def step_build_deps(ctx: PipelineContext) -> StepResult:
    package: PackageSpec = _require(ctx.package, "package")
    install_build_deps(_require(ctx.source_dir, "source directory"), package.name)
    return StepResult.success()


def step_workspace(ctx: PipelineContext) -> StepResult:
    ctx.workspace = build_workspace(
        _require(ctx.source_dir, "source directory"),
        _require(ctx.package, "package"),
        _require(ctx.profile, "maintainer profile"),
        ctx.settings,
    )
    return StepResult.success(str(ctx.workspace.path))


def step_build(ctx: PipelineContext) -> StepResult:
    profile: MaintainerProfile = _require(ctx.profile, "maintainer profile")
    ctx.changes = build_source_package(
        _require(ctx.workspace, "workspace"),
        _require(ctx.package, "package"),
        gpg_key=profile.gpg_key,
        revision=str(ctx.section("packaging").get("debian_revision", "1")),
        assume_yes=bool(ctx.section("behavior").get("assume_yes", True)),
    )
    return StepResult.success(str(ctx.changes))


def step_vcs(ctx: PipelineContext) -> StepResult:
    workspace: BuildWorkspace = _require(ctx.workspace, "workspace")
    activity("vcs", "Setting up Git repository...")
    init_repository(workspace.path, _require(ctx.profile, "maintainer profile"), _require(ctx.package, "package"))
    success("vcs", "Git repository initialized")
    return StepResult.success()


def step_remote(ctx: PipelineContext) -> StepResult:
    launchpad = ctx.section("launchpad")
    pushed = setup_remote(
        ctx.provider,
        _require(ctx.workspace, "workspace").path,
        _require(ctx.profile, "maintainer profile"),
        _require(ctx.package, "package"),
        web_root=launchpad.get("web_root", "https://launchpad.net"),
        code_root=launchpad.get("code_root", "https://code.launchpad.net"),
        git_host=launchpad.get("git_host", "git.launchpad.net"),
    )
    if not pushed:
        return StepResult.advisory("Failed to push to Launchpad")
    return StepResult.success()


def step_upload(ctx: PipelineContext) -> StepResult:
    profile: MaintainerProfile = _require(ctx.profile, "maintainer profile")
    package: PackageSpec = _require(ctx.package, "package")
    write_dput_config(
        ctx.dput_config_path,
        profile.launchpad_username,
        package.name,
        host=ctx.section("launchpad").get("ppa_host", "ppa.launchpad.net"),
    )
    if not upload_package(_require(ctx.changes, "changes file"), ctx.dput_config_path):
        return StepResult.advisory("Upload to PPA failed")
    return StepResult.success()


def step_confirm_registration(ctx: PipelineContext) -> StepResult:
    ctx.register_ppa = confirm_registration(ctx.provider)
    return StepResult.success()


def step_register(ctx: PipelineContext) -> StepResult:
    if not ctx.register_ppa:
        return StepResult.success("skipped")
    profile: MaintainerProfile = _require(ctx.profile, "maintainer profile")
    package: PackageSpec = _require(ctx.package, "package")
    if not add_ppa_to_system(profile.launchpad_username, package.name):
        return StepResult.advisory("Failed to add PPA to system sources")
    return StepResult.success()


DEFAULT_STEPS: tuple[Step, ...] = (
    Step("preflight", "deps", step_preflight),
    Step("maintainer", "user", step_maintainer),
    Step("gpg", "gpg", step_gpg),
    Step("source", "source", step_source),
    Step("package", "package", step_package),
    Step("scaffold", "scaffold", step_scaffold),
    Step("build-deps", "build-deps", step_build_deps),
    Step("workspace", "workspace", step_workspace),
    Step("build", "build", step_build),
    Step("vcs", "vcs", step_vcs),
    Step("remote", "remote", step_remote, Policy.CONTINUE),
    Step("upload", "upload", step_upload, Policy.CONTINUE),
    Step("register-confirm", "register", step_confirm_registration),
    Step("register", "register", step_register, Policy.CONTINUE),
)


def execute_step(step: Step, ctx: PipelineContext) -> StepResult:
    """Run one step, turning any raised exception into a fatal result."""
    try:
        return step.func(ctx)
    except PpaBuilderError as e:
        logger.error("Step %s failed: %s", step.name, e.message)
        return StepResult.fatal(e.message, e.exit_code)
    except Exception as e:
        logger.exception("Step %s raised unexpectedly", step.name)
        return StepResult.fatal(f"{step.name} failed: {e}", EXIT_FAILURE)


def closing_notes(ctx: PipelineContext) -> list[str]:
    profile = ctx.profile
    package = ctx.package
    if profile is None or package is None:
        return []
    launchpad = ctx.section("launchpad")
    user = profile.launchpad_username
    notes = [
        "1. Make sure your GPG key is properly set up on Launchpad",
        "2. Check your PPA page for build status: "
        + ppa_page_url(user, package.name, launchpad.get("web_root", "https://launchpad.net")),
        "3. The build process may take some time",
        "4. Your Git repository is at: "
        + code_url(user, package.name, launchpad.get("code_root", "https://code.launchpad.net")),
    ]
    if ctx.register_ppa:
        notes.append(f"5. Once the package is built, you can install it with: sudo apt-get install {package.name}")
    return notes


def run_pipeline(ctx: PipelineContext, steps: Sequence[Step] = DEFAULT_STEPS) -> int:
    """Run ``steps`` in order and return the process exit code."""
    activity("ppa", "PPA Builder - Create and upload Debian packages to Launchpad")
    completed: list[str] = []

    for step in steps:
        if ctx.run is not None:
            ctx.run.log_event({"event": f"{step.name}.start"})
        result = execute_step(step, ctx)

        if result.status is StepStatus.FATAL and step.policy is Policy.ABORT:
            return phase_error(
                ctx.run,
                step.phase,
                result.message,
                result.exit_code or EXIT_FAILURE,
                event_key=f"{step.name}.error",
                step=step.name,
                completed=completed,
            )

        if not result.ok:
            ctx.warnings.append(f"{step.name}: {result.message}")
            phase_warning(ctx.run, step.phase, result.message, event_key=f"{step.name}.warning", step=step.name)
        elif ctx.run is not None:
            ctx.run.log_event({"event": f"{step.name}.complete", "detail": result.message})
        completed.append(step.name)

    log_phase_event(ctx.run, "ppa", "Process complete!", "pipeline.complete", completed=completed)
    notes = closing_notes(ctx)
    if notes:
        activity("ppa", "Important notes:")
        for note in notes:
            detail(note)
    if ctx.run is not None:
        ctx.run.write_summary(status="success", completed=completed, warnings=ctx.warnings)
    return EXIT_SUCCESS
