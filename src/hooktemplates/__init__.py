"""hooktemplates: hookable template resolution and rendering."""

from hooktemplates.config import TemplatesConfig
from hooktemplates.exceptions import (
    ConfigLoadError,
    ConfigurationError,
    HookTemplatesError,
    InvalidOriginError,
)
from hooktemplates.hooks import HookBus, Topic, capture_output, echo
from hooktemplates.templating import (
    CandidateFolder,
    ComponentOrigin,
    PartCache,
    PathOrigin,
    Template,
)

__all__ = [
    "CandidateFolder",
    "ComponentOrigin",
    "ConfigLoadError",
    "ConfigurationError",
    "HookBus",
    "HookTemplatesError",
    "InvalidOriginError",
    "PartCache",
    "PathOrigin",
    "Template",
    "TemplatesConfig",
    "Topic",
    "capture_output",
    "echo",
]
