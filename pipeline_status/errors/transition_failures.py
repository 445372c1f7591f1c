"""
State transition error classifications.

Raised by the status driver when a requested action cannot be applied to
the stored pipeline status.
"""

from typing import Optional

from .system_failures import ResourceError


class IdentityMismatchError(ResourceError):
    """Stored status belongs to a different pipeline or team."""
    
    def __init__(self, message: str, field: Optional[str] = None,
                 stored: Optional[str] = None, expected: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.stored = stored
        self.expected = expected


class InvalidTransitionError(ResourceError):
    """Requested action is not valid for the current pipeline state."""
    
    def __init__(self, message: str, current_state: Optional[str] = None, 
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition
