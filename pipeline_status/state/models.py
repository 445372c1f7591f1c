"""
Pipeline status data models.

This module defines immutable data structures for the single status
document tracked per store key, the failure record attached by a failed
build, and the build identity supplied by the orchestrator.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class PipelineState(str, Enum):
    """Lifecycle states of a pipeline status document."""
    UNSET = ""
    RUNNING = "RUNNING"
    READY = "READY"


class StatusAction(str, Enum):
    """Actions accepted by the ``out`` command."""
    START = "start"
    FINISH = "finish"
    FAIL = "fail"


@dataclass(frozen=True)
class BuildFailure:
    """Failure record attached to a READY status by a failed build."""

    job_name: str
    build_name: str
    details_url: str


@dataclass(frozen=True)
class BuildIdentity:
    """Identity of the build invoking the resource."""

    pipeline: str = ""
    team: str = ""
    job: str = ""
    build: str = ""
    external_url: str = ""

    def details_url(self) -> str:
        """URL of this build in the orchestrator's web UI."""
        return (
            f"{self.external_url}/teams/{self.team}/pipelines/{self.pipeline}"
            f"/jobs/{self.job}/builds/{self.build}"
        )

    def to_failure(self) -> BuildFailure:
        """Failure record pointing at this build."""
        return BuildFailure(
            job_name=self.job,
            build_name=self.build,
            details_url=self.details_url()
        )


@dataclass(frozen=True)
class PipelineStatus:
    """Current build status of one pipeline."""

    pipeline: str = ""
    team: str = ""
    build_number: str = ""
    last_modified: str = ""
    state: PipelineState = PipelineState.UNSET
    failure: Optional[BuildFailure] = None

    @property
    def is_ready(self) -> bool:
        return self.state == PipelineState.READY

    @property
    def is_running(self) -> bool:
        return self.state == PipelineState.RUNNING

    def with_changes(self, **changes) -> "PipelineStatus":
        """Create a copy with the given fields replaced."""
        return replace(self, **changes)
