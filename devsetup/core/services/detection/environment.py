"""
Detection — host platform and environment profile.

Read-only probes: the OS-type signal, the release-metadata file and
command presence on PATH.  Nothing here writes to the system.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import sys
from collections.abc import Callable
from pathlib import Path

from devsetup.core.config.settings import DEFAULT_MARKER_COMMAND, DEFAULT_OS_RELEASE
from devsetup.core.errors import UnsupportedPlatformError
from devsetup.core.models.profile import EnvironmentProfile, PlatformKind

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]


def host_signal() -> str:
    """The OS-type identifier of this host.

    Prefers the shell's ``OSTYPE`` (``darwin23``, ``linux-gnu``) when it
    is exported, falling back to ``sys.platform``.
    """
    return os.environ.get("OSTYPE") or sys.platform


def detect_platform(signal: str) -> PlatformKind:
    """Map an OS-type identifier to a supported platform.

    Raises:
        UnsupportedPlatformError: For anything that is not macOS or Linux.
    """
    value = signal.strip().lower()
    if value.startswith("darwin"):
        return PlatformKind.MACOS
    if value.startswith("linux"):
        return PlatformKind.LINUX
    raise UnsupportedPlatformError(signal)


def read_os_release(path: Path = DEFAULT_OS_RELEASE) -> dict[str, str]:
    """Parse a release-metadata file (``KEY=value`` lines).

    Returns an empty mapping when the file is absent or unreadable.
    """
    info: dict[str, str] = {}
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                info[key.strip()] = value.strip().strip('"').strip("'")
    except (FileNotFoundError, OSError) as exc:
        logger.debug("No release metadata at %s: %s", path, exc)
    return info


def is_restricted_environment(kind: PlatformKind, marker_present: bool) -> bool:
    """True iff the restricted-environment marker command exists.

    Distro and version play no part.  Only Linux hosts can be restricted.
    """
    return kind == PlatformKind.LINUX and marker_present


def resolve_profile(
    signal: str | None = None,
    *,
    os_release_path: Path = DEFAULT_OS_RELEASE,
    marker_command: str = DEFAULT_MARKER_COMMAND,
    which: Which | None = None,
) -> EnvironmentProfile:
    """Build the environment profile for this host (runtime not yet chosen).

    Raises:
        UnsupportedPlatformError: When the host is neither macOS nor Linux.
    """
    signal = host_signal() if signal is None else signal
    kind = detect_platform(signal)
    arch = platform.machine()

    match kind:
        case PlatformKind.MACOS:
            profile = EnvironmentProfile(platform=kind, arch=arch)
        case PlatformKind.LINUX:
            release = read_os_release(os_release_path)
            marker_present = (which or shutil.which)(marker_command) is not None
            profile = EnvironmentProfile(
                platform=kind,
                arch=arch,
                distro=release.get("ID") or None,
                distro_version=release.get("VERSION_ID") or None,
                is_restricted=is_restricted_environment(kind, marker_present),
            )

    logger.info("Resolved profile from %r: %s", signal, profile.to_dict())
    return profile
