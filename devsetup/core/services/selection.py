"""
Container runtime selection — the one interactive decision of a run.

The caller supplies the I/O: ``ask(prompt) -> str`` reads one line and
``show(line)`` prints a menu line.  The CLI wires these to click; tests
pass plain callables.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from devsetup.core.errors import InvalidSelectionError
from devsetup.core.models.profile import ContainerRuntime, RuntimeSelection

logger = logging.getLogger(__name__)

RUNTIME_MENU: list[tuple[str, ContainerRuntime, str]] = [
    ("1", ContainerRuntime.DOCKER, "Docker (traditional)"),
    ("2", ContainerRuntime.PODMAN, "Podman (rootless, Docker-compatible)"),
]

RESTRICTED_NOTICE = (
    "Docker is blocked on this managed environment. "
    "Would you like to use Podman instead?"
)
RESTRICTED_PROMPT = "Use Podman? (recommended for this environment) [y/n]"
RESTRICTED_DOCKER_WARNING = (
    "Docker selected on a restricted environment. This may not be supported."
)
MENU_PROMPT = f"Enter your choice [1-{len(RUNTIME_MENU)}]"

_YES = re.compile(r"^[Yy]$")


def select_container_runtime(
    is_restricted: bool,
    ask: Callable[[str], str],
    show: Callable[[str], None] | None = None,
) -> RuntimeSelection:
    """Ask the user which container runtime to install.

    Restricted hosts get a yes/no question recommending Podman; declining
    selects Docker with a warning.  Other hosts pick from
    :data:`RUNTIME_MENU`.

    Raises:
        InvalidSelectionError: Menu input outside the listed choices.
    """
    show = show or (lambda _line: None)

    if is_restricted:
        show(RESTRICTED_NOTICE)
        answer = ask(RESTRICTED_PROMPT).strip()
        if _YES.match(answer):
            selection = RuntimeSelection(runtime=ContainerRuntime.PODMAN)
        else:
            selection = RuntimeSelection(
                runtime=ContainerRuntime.DOCKER,
                warning=RESTRICTED_DOCKER_WARNING,
            )
    else:
        show("Select container runtime:")
        for key, _runtime, description in RUNTIME_MENU:
            show(f"{key}) {description}")
        answer = ask(MENU_PROMPT).strip()
        choices = {key: runtime for key, runtime, _ in RUNTIME_MENU}
        if answer not in choices:
            raise InvalidSelectionError(answer, list(choices))
        selection = RuntimeSelection(runtime=choices[answer])

    logger.info("Selected container runtime: %s", selection.runtime)
    return selection
