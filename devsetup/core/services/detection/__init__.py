"""
Detection — ``__init__.py`` re-exports all detection functions.

These functions READ host state but never WRITE.
"""

from devsetup.core.services.detection.environment import (  # noqa: F401
    detect_platform,
    host_signal,
    is_restricted_environment,
    read_os_release,
    resolve_profile,
)
