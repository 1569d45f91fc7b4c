"""
Test doubles for host probing and command execution.
"""

from typing import Any


class FakeWhich:
    """Stand-in for ``shutil.which`` with a fixed set of commands on PATH."""

    def __init__(self, *present: str) -> None:
        self.present = set(present)

    def __call__(self, command: str) -> str | None:
        return f"/usr/bin/{command}" if command in self.present else None


class FakeRunner:
    """Stand-in for ``run_command`` that records every call.

    Commands succeed unless listed in ``failures``; ``outputs`` maps a
    command tuple to its stdout.
    """

    def __init__(
        self,
        failures: set[tuple[str, ...]] | None = None,
        outputs: dict[tuple[str, ...], str] | None = None,
    ) -> None:
        self.failures = failures or set()
        self.outputs = outputs or {}
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        capture: bool = True,
        timeout: float | None = 120,
        tail: bool = True,
    ) -> dict[str, Any]:
        self.calls.append({
            "cmd": list(cmd),
            "needs_sudo": needs_sudo,
            "capture": capture,
            "tail": tail,
        })
        key = tuple(cmd)
        if key in self.failures:
            return {
                "ok": False,
                "cmd": list(cmd),
                "returncode": 1,
                "error": "Command failed (exit 1)",
                "stderr": "boom",
            }
        return {"ok": True, "cmd": list(cmd), "returncode": 0, "stdout": self.outputs.get(key, "")}

    @property
    def commands(self) -> list[list[str]]:
        return [c["cmd"] for c in self.calls]

