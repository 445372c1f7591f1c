"""
Resource protocol commands.

Each command takes a decoded request, talks to one status driver and
returns the JSON-serializable response. Reading stdin and writing stdout
is left to the command line entry points.
"""

import time
from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from ..config.source import Source
from ..driver.factory import driver_from_source
from ..driver.status_driver import StatusDriver
from ..persistence.codec import encode_status
from ..state.models import BuildIdentity, PipelineStatus, StatusAction
from .models import CheckRequest, InRequest, OutRequest, VersionResponse
from .wait import wait_until_ready

logger = structlog.get_logger(__name__)

STATUS_FILE_NAME = "status"

DriverFactory = Callable[[Source, BuildIdentity], StatusDriver]


def run_check(
    request: CheckRequest,
    identity: BuildIdentity,
    driver_factory: Optional[DriverFactory] = None
) -> list[dict[str, str]]:
    """Report new versions: zero or one ``{"number": ...}`` entries."""
    driver = (driver_factory or driver_from_source)(request.source, identity)
    versions = driver.check(request.version.number)
    logger.debug("Checked for new versions", cursor=request.version.number, versions=versions)
    return [{"number": v} for v in versions]


def run_in(
    request: InRequest,
    destination: Path,
    identity: BuildIdentity,
    driver_factory: Optional[DriverFactory] = None
) -> dict[str, Any]:
    """
    Write the current status document into ``destination``.

    When no status exists yet, the requested version is echoed back with an
    unset status so that the initial version reported by check can be fetched.
    """
    destination.mkdir(parents=True, exist_ok=True)

    driver = (driver_factory or driver_from_source)(request.source, identity)
    status = driver.load()

    if status is None:
        status = PipelineStatus(
            pipeline=identity.pipeline,
            team=identity.team,
            build_number=request.version.number
        )
        logger.info("No pipeline status stored yet", version=request.version.number)

    (destination / STATUS_FILE_NAME).write_bytes(encode_status(status))
    return VersionResponse.for_build(status.build_number).to_dict()


def run_out(
    request: OutRequest,
    identity: BuildIdentity,
    driver_factory: Optional[DriverFactory] = None,
    sleep: Callable[[float], None] = time.sleep
) -> dict[str, Any]:
    """Apply ``start``, ``finish`` or ``fail`` and report the resulting build."""
    driver = (driver_factory or driver_from_source)(request.source, identity)

    if request.action == StatusAction.START:
        if request.source.require_ready:
            wait_until_ready(driver, request.source.retry_period(), sleep=sleep)
        status = driver.start()
    elif request.action == StatusAction.FINISH:
        status = driver.finish()
    else:
        status = driver.fail()

    return VersionResponse.for_build(status.build_number).to_dict()
