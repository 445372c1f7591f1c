"""
Resource protocol adapter.

Maps check, in and out requests onto status driver operations.
"""

from .commands import run_check, run_in, run_out
from .environment import identity_from_env
from .models import CheckRequest, InRequest, OutRequest, Version, VersionResponse
from .wait import wait_until_ready

__all__ = [
    "CheckRequest",
    "InRequest",
    "OutRequest",
    "Version",
    "VersionResponse",
    "identity_from_env",
    "run_check",
    "run_in",
    "run_out",
    "wait_until_ready",
]
