"""
Status driver module.

Coordinates the store, codec and state machine for one status document.
"""

from .factory import driver_from_source
from .status_driver import StatusDriver, version_not_less_than

__all__ = ["StatusDriver", "driver_from_source", "version_not_less_than"]
