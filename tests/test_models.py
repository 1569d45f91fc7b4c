"""
Tests for domain models — environment profile and tool recipes.
"""

import pytest
from pydantic import ValidationError

from devsetup.core.models.profile import (
    ContainerRuntime,
    EnvironmentProfile,
    PlatformKind,
    RuntimeSelection,
)
from devsetup.core.models.tool import InstallStep, ToolCatalog, ToolCheck, ToolRecipe

# ── EnvironmentProfile ───────────────────────────────────────────────


class TestEnvironmentProfile:
    def test_linux_with_distro(self):
        p = EnvironmentProfile(platform=PlatformKind.LINUX, distro="ubuntu", distro_version="22.04")
        assert p.label == "Linux: ubuntu 22.04"

    def test_macos_rejects_distro(self):
        with pytest.raises(ValidationError):
            EnvironmentProfile(platform=PlatformKind.MACOS, distro="ubuntu")

    def test_macos_cannot_be_restricted(self):
        with pytest.raises(ValidationError):
            EnvironmentProfile(platform=PlatformKind.MACOS, is_restricted=True)

    def test_frozen(self):
        p = EnvironmentProfile(platform=PlatformKind.MACOS)
        with pytest.raises(ValidationError):
            p.platform = PlatformKind.LINUX

    def test_with_runtime_returns_copy(self):
        p = EnvironmentProfile(platform=PlatformKind.MACOS, arch="arm64")
        q = p.with_runtime(ContainerRuntime.PODMAN)
        assert q.runtime == ContainerRuntime.PODMAN
        assert p.runtime is None
        assert q.arch == "arm64"

    def test_runtime_chosen_once(self):
        p = EnvironmentProfile(platform=PlatformKind.MACOS).with_runtime(ContainerRuntime.DOCKER)
        with pytest.raises(ValueError):
            p.with_runtime(ContainerRuntime.PODMAN)

    def test_variants(self):
        assert EnvironmentProfile(platform=PlatformKind.MACOS).variants == ["macos", "_default"]
        assert EnvironmentProfile(platform=PlatformKind.LINUX).variants == ["linux", "_default"]
        restricted = EnvironmentProfile(platform=PlatformKind.LINUX, is_restricted=True)
        assert restricted.variants == ["restricted", "linux", "_default"]

    def test_labels(self):
        assert EnvironmentProfile(platform=PlatformKind.MACOS, arch="arm64").label == "macOS on arm64"
        assert EnvironmentProfile(platform=PlatformKind.LINUX).label == "Linux"

    def test_to_dict(self):
        p = EnvironmentProfile(
            platform=PlatformKind.LINUX, distro="debian", is_restricted=True,
        ).with_runtime(ContainerRuntime.DOCKER)
        d = p.to_dict()
        assert d["platform"] == "linux"
        assert d["distro"] == "debian"
        assert d["is_restricted"] is True
        assert d["runtime"] == "docker"


class TestRuntimeSelection:
    def test_warning_defaults_to_none(self):
        assert RuntimeSelection(runtime=ContainerRuntime.PODMAN).warning is None


# ── Tool recipes ─────────────────────────────────────────────────────


class TestInstallStep:
    def test_run_argv(self):
        assert InstallStep(run=["brew", "update"]).argv == ["brew", "update"]

    def test_shell_argv(self):
        step = InstallStep(shell="echo hi | cat")
        assert step.argv == ["bash", "-c", "echo hi | cat"]

    def test_needs_exactly_one_command(self):
        with pytest.raises(ValidationError):
            InstallStep()
        with pytest.raises(ValidationError):
            InstallStep(run=["a"], shell="b")
        with pytest.raises(ValidationError):
            InstallStep(run=["a"], wait_until=["b"])


class TestToolRecipe:
    def _recipe(self) -> ToolRecipe:
        return ToolRecipe(
            id="thing",
            label="Thing",
            check={"_default": ToolCheck(commands=["thing"])},
            install={
                "linux": [InstallStep(run=["apt", "install", "thing"])],
                "restricted": [InstallStep(run=["apt", "install", "thing-corp"])],
            },
        )

    def test_most_specific_variant_wins(self):
        steps = self._recipe().steps_for(["restricted", "linux", "_default"])
        assert steps[0].run == ["apt", "install", "thing-corp"]

    def test_falls_back_to_less_specific(self):
        recipe = self._recipe()
        assert recipe.steps_for(["linux", "_default"])[0].run == ["apt", "install", "thing"]
        assert recipe.check_for(["macos", "_default"]).commands == ["thing"]

    def test_no_match(self):
        assert self._recipe().steps_for(["macos", "_default"]) is None


class TestToolCatalog:
    def test_get_and_ids(self):
        catalog = ToolCatalog(tools=[ToolRecipe(id="a", label="A"), ToolRecipe(id="b", label="B")])
        assert catalog.ids == ["a", "b"]
        assert catalog.get("b").label == "B"
        assert catalog.get("zzz") is None
