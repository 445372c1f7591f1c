"""
Core pipeline status state machine.

``change_state`` is the only place a build number is incremented. It is a
pure function: the current status is never modified and malformed build
numbers degrade to zero instead of failing.
"""

import re
from datetime import datetime
from typing import Optional

from ..utils.time import now_timestamp
from .models import BuildFailure, PipelineState, PipelineStatus


_DECIMAL = re.compile(r"[+-]?\d+")


def _parse_build_number(value: Optional[str]) -> int:
    if value and _DECIMAL.fullmatch(value):
        return int(value)
    return 0


def change_state(
    status: PipelineStatus,
    target: PipelineState,
    failure: Optional[BuildFailure] = None,
    now: Optional[datetime] = None
) -> PipelineStatus:
    """
    Compute the status that results from moving ``status`` into ``target``.

    Args:
        status: Current pipeline status
        target: Desired state, RUNNING or READY
        failure: Failure record to attach when moving into READY
        now: Clock override for the last-modified stamp

    Returns:
        New status; an unmodified copy when ``status`` is already in ``target``
    """
    if target == PipelineState.RUNNING and status.state != PipelineState.RUNNING:
        build_number = _parse_build_number(status.build_number) + 1
        return status.with_changes(
            state=PipelineState.RUNNING,
            build_number=str(build_number),
            failure=None,
            last_modified=now_timestamp(now)
        )

    if target == PipelineState.READY and status.state != PipelineState.READY:
        return status.with_changes(
            state=PipelineState.READY,
            failure=failure,
            last_modified=now_timestamp(now)
        )

    return status.with_changes()
