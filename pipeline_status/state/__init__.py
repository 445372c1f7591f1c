"""
Pipeline status entities and state machine.

Handles transitions between the unset state, RUNNING and READY.
"""

from .machine import change_state
from .models import (
    BuildFailure,
    BuildIdentity,
    PipelineState,
    PipelineStatus,
    StatusAction,
)

__all__ = [
    "BuildFailure",
    "BuildIdentity",
    "PipelineState",
    "PipelineStatus",
    "StatusAction",
    "change_state",
]
