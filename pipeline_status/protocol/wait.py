"""
Require-ready polling.

Before starting a build, a pipeline configured with ``require_ready`` polls
the status until the previous build is READY (or no build has ever run).
The wait has no upper bound and no cancellation beyond terminating the
process. The final poll and the following start are not atomic, so two
waiters released by the same READY status can both start.
"""

import time
from datetime import timedelta
from typing import Callable, Optional

import structlog

from ..driver.status_driver import StatusDriver
from ..state.models import PipelineState, PipelineStatus

logger = structlog.get_logger(__name__)

_RELEASING_STATES = (PipelineState.READY, PipelineState.UNSET)


def is_startable(status: Optional[PipelineStatus]) -> bool:
    """Whether a new build may start on top of ``status``."""
    return status is None or status.state in _RELEASING_STATES


def wait_until_ready(
    driver: StatusDriver,
    retry_after: timedelta,
    sleep: Callable[[float], None] = time.sleep
) -> Optional[PipelineStatus]:
    """
    Block until the stored status allows a new build to start.

    Args:
        driver: Driver bound to the status key
        retry_after: Interval between polls
        sleep: Sleep function, injectable for tests

    Returns:
        The last status observed
    """
    status = driver.load()
    polls = 0

    while not is_startable(status):
        polls += 1
        logger.info(
            "Waiting for pipeline to become ready",
            state=status.state.value,
            build=status.build_number,
            poll=polls,
            retry_after_seconds=retry_after.total_seconds()
        )
        sleep(retry_after.total_seconds())
        status = driver.load()

    logger.debug("Pipeline ready to start", polls=polls)
    return status
