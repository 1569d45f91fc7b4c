"""
Setup use case — install the developer toolchain for a resolved profile.

Ties together the prerequisite check, the finished environment profile
and the package manager.  Stages run strictly in order; the first
failing step ends the run.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field

from devsetup.core.errors import ExternalCommandFailure, MissingPrerequisiteError
from devsetup.core.models.profile import ContainerRuntime, EnvironmentProfile
from devsetup.core.services.package_manager import PackageManager

logger = logging.getLogger(__name__)

PREREQUISITES = ["git"]

# (section title, tool ids); the container runtime stage is appended per run
TOOL_STAGES: list[tuple[str, list[str]]] = [
    ("System Updates", ["system-update"]),
    ("Development Tools Installation", ["intellij", "build-tools", "jq"]),
]


def check_prerequisites(which: Callable[[str], str | None] | None = None) -> None:
    """Fail fast when a tool the setup relies on is missing.

    Raises:
        MissingPrerequisiteError: If Git is not on PATH.
    """
    which = which or shutil.which
    for command in PREREQUISITES:
        if which(command) is None:
            raise MissingPrerequisiteError(
                f"{command.capitalize()} is not installed. Please install it first."
            )


def setup_stages(runtime: ContainerRuntime) -> list[tuple[str, list[str]]]:
    """All stages for a run, ending with the chosen container runtime."""
    return TOOL_STAGES + [
        (f"Container Runtime Installation: {runtime.value}", [runtime.value]),
    ]


@dataclass
class SetupResult:
    """Result of the setup use case."""

    profile: EnvironmentProfile | None = None
    installed: list[str] = field(default_factory=list)
    already_installed: list[str] = field(default_factory=list)
    not_applicable: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    failed_tool: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "profile": self.profile.to_dict() if self.profile else None,
            "installed": self.installed,
            "already_installed": self.already_installed,
            "not_applicable": self.not_applicable,
            "skipped": self.skipped,
            "warnings": self.warnings,
        }
        if self.error:
            result["error"] = self.error
            result["failed_tool"] = self.failed_tool
        return result


def run_setup(
    profile: EnvironmentProfile,
    manager: PackageManager,
    *,
    on_section: Callable[[str], None] | None = None,
    warnings: list[str] | None = None,
) -> SetupResult:
    """Install every stage's tools for ``profile``.

    Args:
        profile: Finished profile; its container runtime must be chosen.
        manager: Package manager bound to the same profile.
        on_section: Called with each stage title before it starts.
        warnings: Warnings already raised during selection, carried into
            the result.

    Returns:
        SetupResult; ``error`` is set if a step failed.
    """
    if profile.runtime is None:
        raise ValueError("Container runtime must be chosen before setup runs")

    result = SetupResult(profile=profile, warnings=list(warnings or []))

    for title, tool_ids in setup_stages(profile.runtime):
        if on_section:
            on_section(title)

        for tool_id in tool_ids:
            if not manager.has_recipe(tool_id):
                result.not_applicable.append(tool_id)
                continue

            if manager.is_checked(tool_id) and manager.is_installed(tool_id):
                label = manager.recipe(tool_id).label
                manager.emit("info", f"{label} is already installed.")
                result.already_installed.append(tool_id)
                continue

            try:
                executed = manager.install(tool_id)
            except ExternalCommandFailure as e:
                logger.error("Setup stopped at %s: %s", tool_id, e)
                result.failed_tool = tool_id
                result.error = str(e)
                result.warnings.extend(manager.warnings)
                return result

            if executed:
                result.installed.append(tool_id)
            else:
                result.skipped.append(tool_id)

    result.warnings.extend(manager.warnings)
    return result
