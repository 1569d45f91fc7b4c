"""
Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for probes and
install steps.  Sudo prefixing, logging and error handling are
centralised here; callers get a plain result dict back.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

_TAIL = 2000


def run_command(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    capture: bool = True,
    timeout: float | None = 120,
    tail: bool = True,
) -> dict[str, Any]:
    """Run a command and report how it went.

    Install steps run with ``capture=False`` so package-manager output and
    sudo's password prompt reach the terminal directly.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Prefix with ``sudo`` unless already root.
        capture: Capture stdout/stderr instead of inheriting the terminal.
        timeout: Seconds before ``TimeoutExpired``; None waits forever.
        tail: Keep only the last part of captured output. Probes that
            search stdout pass False to get all of it.

    Returns:
        ``{"ok": True, "returncode": 0, "stdout": "...", "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", ...}`` on failure.
    """
    if needs_sudo and os.geteuid() != 0:
        cmd = ["sudo"] + cmd

    logger.debug("Running: %s", cmd)
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return {
            "ok": False,
            "cmd": cmd,
            "returncode": None,
            "error": f"Command not found: {cmd[0]}",
        }
    except subprocess.TimeoutExpired:
        return {
            "ok": False,
            "cmd": cmd,
            "returncode": None,
            "error": f"Command timed out ({timeout}s)",
        }
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return {"ok": False, "cmd": cmd, "returncode": None, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout or ""
    stderr = result.stderr or ""
    if tail:
        stdout, stderr = stdout[-_TAIL:], stderr[-_TAIL:]

    if result.returncode == 0:
        return {
            "ok": True,
            "cmd": cmd,
            "returncode": 0,
            "stdout": stdout,
            "elapsed_ms": elapsed_ms,
        }

    logger.debug("Command %s exited %d: %s", cmd, result.returncode, stderr)
    return {
        "ok": False,
        "cmd": cmd,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }
