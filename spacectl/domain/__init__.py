"""Domain package exports for value objects, selection and the command model."""

from .commands import (
    EXECUTION_ORDER,
    CommandKind,
    CommandPlan,
    CommandRequest,
    Requirements,
)
from .config_text import parse_configuration
from .entities import LiveActivity, ProjectFolder, is_active_state, normalize_state
from .selection import Selection, SelectionRequest, resolve_selection

__all__ = [
    "CommandKind",
    "CommandPlan",
    "CommandRequest",
    "EXECUTION_ORDER",
    "LiveActivity",
    "ProjectFolder",
    "Requirements",
    "Selection",
    "SelectionRequest",
    "is_active_state",
    "normalize_state",
    "parse_configuration",
    "resolve_selection",
]
