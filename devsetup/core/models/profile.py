"""
EnvironmentProfile — what kind of host this run is operating on.

Built once by the environment resolver, completed once by the runtime
selection, then passed read-only to every setup step.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class PlatformKind(StrEnum):
    """Supported host operating systems."""

    MACOS = "macos"
    LINUX = "linux"


class ContainerRuntime(StrEnum):
    """Container runtime backends the setup can install."""

    DOCKER = "docker"
    PODMAN = "podman"


class RuntimeSelection(BaseModel):
    """Outcome of the interactive runtime choice."""

    model_config = ConfigDict(frozen=True)

    runtime: ContainerRuntime
    warning: str | None = None  # set only for a discouraged combination


class EnvironmentProfile(BaseModel):
    """Immutable description of the host.

    ``distro`` / ``distro_version`` are Linux-only.  ``runtime`` stays
    ``None`` until :meth:`with_runtime` is called, which happens exactly
    once per run.
    """

    model_config = ConfigDict(frozen=True)

    platform: PlatformKind
    arch: str = ""
    distro: str | None = None
    distro_version: str | None = None
    is_restricted: bool = False
    runtime: ContainerRuntime | None = None

    @model_validator(mode="after")
    def _linux_only_fields(self) -> EnvironmentProfile:
        if self.platform != PlatformKind.LINUX:
            if self.distro or self.distro_version:
                raise ValueError("distro fields are only valid on Linux")
            if self.is_restricted:
                raise ValueError("restricted environments are Linux-only")
        return self

    def with_runtime(self, runtime: ContainerRuntime) -> EnvironmentProfile:
        """Return a copy with the chosen runtime recorded."""
        if self.runtime is not None:
            raise ValueError(f"Container runtime already chosen: {self.runtime}")
        return self.model_copy(update={"runtime": runtime})

    @property
    def variants(self) -> list[str]:
        """Catalog keys to try for this host, most specific first."""
        match self.platform:
            case PlatformKind.MACOS:
                return ["macos", "_default"]
            case PlatformKind.LINUX:
                if self.is_restricted:
                    return ["restricted", "linux", "_default"]
                return ["linux", "_default"]

    @property
    def label(self) -> str:
        """Human-readable one-liner, e.g. ``Linux: ubuntu 22.04``."""
        match self.platform:
            case PlatformKind.MACOS:
                return f"macOS on {self.arch}" if self.arch else "macOS"
            case PlatformKind.LINUX:
                parts = [p for p in (self.distro, self.distro_version) if p]
                return f"Linux: {' '.join(parts)}" if parts else "Linux"

    def to_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "arch": self.arch,
            "distro": self.distro,
            "distro_version": self.distro_version,
            "is_restricted": self.is_restricted,
            "runtime": self.runtime.value if self.runtime else None,
        }
