"""
Tool model — how a tool is detected and installed on each host variant.

Loaded from ``core/data/tools.yml``.  Recipes are keyed by variant
(``macos``, ``linux``, ``restricted``, ``_default``) and looked up in the
order given by :attr:`EnvironmentProfile.variants`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class ToolCheck(BaseModel):
    """How to tell whether a tool is already present.

    Installed if any of ``commands`` is on PATH, or if ``run`` exits 0
    (and its stdout contains ``output_contains``, when given).
    """

    commands: list[str] = Field(default_factory=list)
    run: list[str] = Field(default_factory=list)
    output_contains: str = ""


class InstallStep(BaseModel):
    """One shelled-out command of an install recipe."""

    run: list[str] = Field(default_factory=list)
    shell: str = ""            # pipeline, executed with ``bash -c``
    sudo: bool = False
    requires: str = ""         # command that must exist, else skip with a warning
    missing_warning: str = ""
    skip_if_present: str = ""  # skip the step when this command already exists
    allow_failure: bool = False
    failure_note: str = ""
    message: str = ""          # printed before running
    level: Literal["info", "warning"] = "info"  # label for ``message``
    warning: str = ""          # printed after success
    wait_until: list[str] = Field(default_factory=list)  # readiness probe

    @model_validator(mode="after")
    def _one_command(self) -> InstallStep:
        given = [bool(self.run), bool(self.shell), bool(self.wait_until)]
        if given.count(True) != 1:
            raise ValueError(
                "an install step needs exactly one of 'run', 'shell' or 'wait_until'"
            )
        return self

    @property
    def argv(self) -> list[str]:
        """Command vector, with sudo applied by the runner."""
        if self.shell:
            return ["bash", "-c", self.shell]
        return list(self.run)


class ToolRecipe(BaseModel):
    """Detection and install recipe for one tool, per variant."""

    id: str
    label: str
    check: dict[str, ToolCheck] = Field(default_factory=dict)
    install: dict[str, list[InstallStep]] = Field(default_factory=dict)
    success_message: str = ""

    def check_for(self, variants: list[str]) -> ToolCheck | None:
        """First matching idempotence check, or None if the tool is never checked."""
        for key in variants:
            if key in self.check:
                return self.check[key]
        return None

    def steps_for(self, variants: list[str]) -> list[InstallStep] | None:
        """First matching install recipe, or None if nothing applies to this host."""
        for key in variants:
            if key in self.install:
                return self.install[key]
        return None


class ToolCatalog(BaseModel):
    """All known tools, in declaration order."""

    tools: list[ToolRecipe] = Field(default_factory=list)

    def get(self, tool_id: str) -> ToolRecipe | None:
        """Look up a tool by id."""
        for tool in self.tools:
            if tool.id == tool_id:
                return tool
        return None

    @property
    def ids(self) -> list[str]:
        return [t.id for t in self.tools]
