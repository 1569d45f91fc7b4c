"""
Error taxonomy for a setup run.

Every error here is fatal: nothing is retried or rolled back.  The CLI
catches ``SetupError``, prints a labelled message and exits with code 1.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for all fatal setup errors."""


class UnsupportedPlatformError(SetupError):
    """The host signals neither macOS nor Linux."""

    def __init__(self, host_signal: str) -> None:
        self.host_signal = host_signal
        super().__init__(f"Unsupported operating system: {host_signal or '(unknown)'}")


class InvalidSelectionError(SetupError):
    """Menu input outside the enumerated choices."""

    def __init__(self, value: str, choices: list[str]) -> None:
        self.value = value
        self.choices = choices
        super().__init__(
            f"Invalid choice: {value!r} (expected one of: {', '.join(choices)})"
        )


class MissingPrerequisiteError(SetupError):
    """A tool the run depends on but never installs is absent."""


class ConfigError(SetupError):
    """Raised when settings or the tool catalog are invalid."""


class ExternalCommandFailure(SetupError):
    """A shelled-out command exited non-zero (or could not be started)."""

    def __init__(
        self,
        cmd: list[str],
        returncode: int | None = None,
        stderr: str = "",
        *,
        reason: str = "",
    ) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        if not reason:
            reason = (
                f"exit {returncode}" if returncode is not None else "could not run"
            )
        super().__init__(f"Command failed ({reason}): {' '.join(cmd)}")
