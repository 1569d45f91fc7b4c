"""Domain models."""

from devsetup.core.models.profile import (  # noqa: F401
    ContainerRuntime,
    EnvironmentProfile,
    PlatformKind,
    RuntimeSelection,
)
from devsetup.core.models.tool import (  # noqa: F401
    InstallStep,
    ToolCatalog,
    ToolCheck,
    ToolRecipe,
)
