"""
Status driver.

Implements check, load, start, finish and fail against the single status
document stored under one key. Every operation is a plain read-modify-write:
writes are unconditional overwrites, so two processes advancing the same key
at once can lose a build number increment. The require-ready wait in the
protocol layer narrows that window but does not close it.
"""

import re
from typing import Optional

from ..config.defaults import get_default_config
from ..errors import IdentityMismatchError, InvalidTransitionError
from ..logging.config import get_state_logger, log_state_transition
from ..persistence.codec import decode_status, encode_status
from ..persistence.store import Store, WriteOptions
from ..state.machine import change_state
from ..state.models import (
    BuildFailure,
    BuildIdentity,
    PipelineState,
    PipelineStatus,
)

state_logger = get_state_logger(__name__)

_DECIMAL = re.compile(r"\d+")


def version_not_less_than(version: str, cursor: str) -> bool:
    """
    Whether ``version`` should be reported to a caller positioned at ``cursor``.

    Decimal versions compare numerically; anything else, including an
    empty cursor, falls back to plain string ordering.
    """
    if _DECIMAL.fullmatch(version) and _DECIMAL.fullmatch(cursor):
        return int(version) >= int(cursor)
    return version >= cursor


class StatusDriver:
    """Drives the pipeline status document stored under one key."""

    def __init__(
        self,
        store: Store,
        key: str,
        identity: BuildIdentity,
        initial_version: str = "",
        server_side_encryption: Optional[str] = None
    ):
        self.store = store
        self.key = key
        self.identity = identity
        self.initial_version = initial_version
        self.write_options = WriteOptions(
            content_type=get_default_config().s3.content_type,
            server_side_encryption=server_side_encryption or None
        )
        self.logger = state_logger.bind(key=key, pipeline=identity.pipeline, team=identity.team)

    def load(self) -> Optional[PipelineStatus]:
        """Current status, or None when no build has ever been started."""
        data = self.store.fetch(self.key)
        if data is None:
            return None
        return decode_status(data)

    def check(self, cursor: str = "") -> list[str]:
        """
        Versions newer than or equal to ``cursor``.

        Returns at most one version. Before any start, an empty cursor
        yields the initial version; afterwards only a READY build is reported.
        """
        cursor = cursor or ""
        status = self.load()

        if status is None:
            if cursor:
                return []
            return [self.initial_version or get_default_config().versions.initial_version]

        if status.state != PipelineState.READY:
            self.logger.debug("No ready build to report", state=status.state.value)
            return []

        if version_not_less_than(status.build_number, cursor):
            return [status.build_number]
        return []

    def start(self) -> PipelineStatus:
        """
        Move the pipeline into RUNNING, creating the status on first use.

        Raises:
            IdentityMismatchError: If the stored status belongs to another pipeline or team
        """
        status = self.load()

        if status is None:
            status = PipelineStatus(
                pipeline=self.identity.pipeline,
                team=self.identity.team,
                build_number=self._pre_start_build_number()
            )
            self.logger.info("Creating pipeline status", build=status.build_number)
        else:
            self._verify_identity(status)

        new_status = change_state(status, PipelineState.RUNNING)
        self._persist(new_status)
        self._log_transition(status, new_status, "start")
        return new_status

    def finish(self) -> PipelineStatus:
        """Move the pipeline into READY without a failure."""
        return self._make_ready(None, "finish")

    def fail(self) -> PipelineStatus:
        """Move the pipeline into READY with a failure pointing at this build."""
        return self._make_ready(self.identity.to_failure(), "fail")

    def _make_ready(self, failure: Optional[BuildFailure], action: str) -> PipelineStatus:
        status = self.load()

        if status is None:
            raise InvalidTransitionError(
                "Cannot create a pipeline status for the first time in READY state",
                current_state=None,
                attempted_transition=action
            )

        if status.is_ready:
            if failure is not None:
                raise InvalidTransitionError(
                    "Cannot add a failure to a non-running pipeline",
                    current_state=status.state.value,
                    attempted_transition=action
                )
            self.logger.info("Pipeline already ready", build=status.build_number)
            return status

        new_status = change_state(status, PipelineState.READY, failure)
        self._persist(new_status)
        self._log_transition(status, new_status, action)
        return new_status

    def _verify_identity(self, status: PipelineStatus) -> None:
        if status.pipeline != self.identity.pipeline:
            raise IdentityMismatchError(
                f"State file is already associated with pipeline {status.pipeline} "
                f"but is trying to be associated with pipeline {self.identity.pipeline}",
                field="pipeline",
                stored=status.pipeline,
                expected=self.identity.pipeline
            )

        if status.team != self.identity.team:
            raise IdentityMismatchError(
                f"State file is already associated with team {status.team} "
                f"but is trying to be associated with team {self.identity.team}",
                field="team",
                stored=status.team,
                expected=self.identity.team
            )

    def _pre_start_build_number(self) -> str:
        # The first start increments, so seed one below the initial version
        default = get_default_config().versions.pre_start_build
        if not self.initial_version or not _DECIMAL.fullmatch(self.initial_version):
            return default

        initial = int(self.initial_version)
        if initial <= 0:
            return default
        return str(initial - 1)

    def _persist(self, status: PipelineStatus) -> None:
        self.store.write(self.key, encode_status(status), self.write_options)

    def _log_transition(self, old: PipelineStatus, new: PipelineStatus, trigger: str) -> None:
        log_state_transition(
            self.logger,
            pipeline=new.pipeline,
            from_state=old.state.value,
            to_state=new.state.value,
            trigger=trigger,
            context={"build": new.build_number, "changed": old != new}
        )
