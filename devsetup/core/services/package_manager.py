"""
Package manager — catalog-driven ``is_installed`` / ``install``.

Executes the recipe that matches the host variant, step by step, through
the subprocess runner.  A failing step raises ``ExternalCommandFailure``
right away; nothing is retried or rolled back.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable
from typing import Any

from devsetup.core.config.settings import DEFAULT_POLL_INTERVAL
from devsetup.core.errors import ConfigError, ExternalCommandFailure
from devsetup.core.models.profile import EnvironmentProfile
from devsetup.core.models.tool import InstallStep, ToolCatalog, ToolCheck, ToolRecipe
from devsetup.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)

# (level, message) with level one of: info, warning, success
Reporter = Callable[[str, str], None]
Runner = Callable[..., dict[str, Any]]


def _silent(_level: str, _message: str) -> None:
    pass


class PackageManager:
    """Installs catalog tools on the host described by ``profile``."""

    def __init__(
        self,
        profile: EnvironmentProfile,
        catalog: ToolCatalog,
        *,
        run: Runner | None = None,
        which: Callable[[str], str | None] | None = None,
        sleep: Callable[[float], None] | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        report: Reporter | None = None,
    ) -> None:
        self.profile = profile
        self.catalog = catalog
        self._run = run or run_command
        self._which = which or shutil.which
        self._sleep = sleep or time.sleep
        self.poll_interval = poll_interval
        self._report = report or _silent
        self.warnings: list[str] = []

    def emit(self, level: str, message: str) -> None:
        """Report a progress line, remembering warnings for the result."""
        if level == "warning":
            self.warnings.append(message)
        self._report(level, message)

    # ── Lookup ──────────────────────────────────────────────────

    def recipe(self, tool_id: str) -> ToolRecipe:
        tool = self.catalog.get(tool_id)
        if tool is None:
            raise ConfigError(f"Unknown tool: {tool_id}")
        return tool

    def has_recipe(self, tool_id: str) -> bool:
        """Whether the tool has install steps for this host."""
        return self.recipe(tool_id).steps_for(self.profile.variants) is not None

    def is_checked(self, tool_id: str) -> bool:
        """Whether the tool has an idempotence check for this host."""
        return self.recipe(tool_id).check_for(self.profile.variants) is not None

    def command_exists(self, command: str) -> bool:
        return self._which(command) is not None

    # ── Detection ───────────────────────────────────────────────

    def is_installed(self, tool_id: str) -> bool:
        """True if the tool's check for this host passes.

        Tools without a check are never reported as installed.
        """
        check = self.recipe(tool_id).check_for(self.profile.variants)
        if check is None:
            return False
        return self._passes(check)

    def _passes(self, check: ToolCheck) -> bool:
        if any(self.command_exists(c) for c in check.commands):
            return True
        if not check.run:
            return False
        result = self._run(check.run, capture=True, timeout=60, tail=False)
        if not result["ok"]:
            return False
        if check.output_contains:
            return check.output_contains in result.get("stdout", "")
        return True

    # ── Install ─────────────────────────────────────────────────

    def install(self, tool_id: str) -> int:
        """Run the tool's install steps for this host.

        Returns:
            Number of steps that ran (skipped steps are not counted).

        Raises:
            ExternalCommandFailure: On the first failing step.
        """
        tool = self.recipe(tool_id)
        steps = tool.steps_for(self.profile.variants)
        if steps is None:
            logger.debug("No install recipe for %s on %s", tool_id, self.profile.variants)
            return 0

        executed = 0
        for step in steps:
            if self._execute(step):
                executed += 1

        if tool.success_message:
            self.emit("success", tool.success_message)
        logger.info("Installed %s (%d steps)", tool_id, executed)
        return executed

    def _execute(self, step: InstallStep) -> bool:
        if step.requires and not self.command_exists(step.requires):
            self.emit(
                "warning",
                step.missing_warning or f"{step.requires} not found. Skipping.",
            )
            return False
        if step.skip_if_present and self.command_exists(step.skip_if_present):
            logger.debug("Skipping step, %s already present", step.skip_if_present)
            return False

        if step.message:
            self.emit(step.level, step.message)

        if step.wait_until:
            self.wait_for_ready(step.wait_until)
            return True

        result = self._run(
            step.argv,
            needs_sudo=step.sudo,
            capture=step.allow_failure,
            timeout=None,
        )
        if not result["ok"]:
            if step.allow_failure:
                if step.failure_note:
                    self.emit("info", step.failure_note)
                return True
            raise ExternalCommandFailure(
                result.get("cmd", step.argv),
                result.get("returncode"),
                result.get("stderr", ""),
                reason="" if result.get("returncode") is not None else result.get("error", ""),
            )

        if step.warning:
            self.emit("warning", step.warning)
        return True

    def wait_for_ready(self, probe: list[str]) -> int:
        """Poll ``probe`` until it exits 0, sleeping a fixed interval between tries.

        There is no timeout: the operator either starts the daemon or
        interrupts the process.

        Returns:
            Number of attempts made.
        """
        attempts = 0
        while True:
            attempts += 1
            result = self._run(probe, capture=True, timeout=30)
            if result["ok"]:
                logger.info("%s ready after %d attempts", probe[0], attempts)
                return attempts
            logger.debug("Waiting for %s (attempt %d)", probe[0], attempts)
            self._sleep(self.poll_interval)
