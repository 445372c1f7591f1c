"""
Error classification for the pipeline status resource.

Every exception here is fatal to the running operation. A missing status
document is not an error and is reported by the store as ``None``.
"""

from .system_failures import (
    ResourceError,
    StoreError,
    MalformedStatusError,
    ConfigurationError,
)
from .transition_failures import (
    IdentityMismatchError,
    InvalidTransitionError,
)

__all__ = [
    # System Failures
    "ResourceError",
    "StoreError",
    "MalformedStatusError",
    "ConfigurationError",
    # Transition Failures
    "IdentityMismatchError",
    "InvalidTransitionError",
]
