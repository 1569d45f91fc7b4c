"""
Detection use case — resolve the environment profile and tool states.

Read-only: nothing is prompted for and nothing is installed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from devsetup.core.config.catalog_loader import load_catalog
from devsetup.core.config.settings import Settings
from devsetup.core.errors import SetupError
from devsetup.core.models.profile import EnvironmentProfile
from devsetup.core.services.detection import resolve_profile
from devsetup.core.services.package_manager import PackageManager

logger = logging.getLogger(__name__)


@dataclass
class DetectResult:
    """Result of the detect use case."""

    profile: EnvironmentProfile | None = None
    host_signal: str = ""
    tools: list[dict] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "host_signal": self.host_signal}

        result: dict = {
            "host_signal": self.host_signal,
            "profile": self.profile.to_dict() if self.profile else None,
        }
        if self.tools:
            result["tools"] = self.tools
        return result


def run_detect(
    settings: Settings,
    signal: str,
    *,
    with_tools: bool = False,
    which: Callable[[str], str | None] | None = None,
) -> DetectResult:
    """Resolve the profile for this host, optionally with tool states.

    Args:
        settings: Process settings (release file, marker command).
        signal: OS-type identifier of the host.
        with_tools: Also probe every catalog tool for this host.

    Returns:
        DetectResult; ``error`` is set when the platform is unsupported.
    """
    result = DetectResult(host_signal=signal)

    try:
        profile = resolve_profile(
            signal,
            os_release_path=settings.os_release,
            marker_command=settings.marker_command,
            which=which,
        )
    except SetupError as e:
        result.error = str(e)
        return result

    result.profile = profile

    if with_tools:
        catalog = load_catalog()
        manager = PackageManager(profile, catalog, which=which)
        for tool in catalog.tools:
            applicable = manager.has_recipe(tool.id)
            checked = manager.is_checked(tool.id)
            result.tools.append({
                "id": tool.id,
                "label": tool.label,
                "applicable": applicable,
                "checked": checked,
                "installed": applicable and checked and manager.is_installed(tool.id),
            })

    return result
