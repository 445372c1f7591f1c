"""Build identity supplied by the orchestrator through the environment."""

import os
from typing import Mapping, Optional

from ..state.models import BuildIdentity

PIPELINE_VAR = "BUILD_PIPELINE_NAME"
TEAM_VAR = "BUILD_TEAM_NAME"
JOB_VAR = "BUILD_JOB_NAME"
BUILD_VAR = "BUILD_NAME"
EXTERNAL_URL_VAR = "ATC_EXTERNAL_URL"


def identity_from_env(env: Optional[Mapping[str, str]] = None) -> BuildIdentity:
    """Read the invoking build's identity; missing variables become empty strings."""
    if env is None:
        env = os.environ
    return BuildIdentity(
        pipeline=env.get(PIPELINE_VAR, ""),
        team=env.get(TEAM_VAR, ""),
        job=env.get(JOB_VAR, ""),
        build=env.get(BUILD_VAR, ""),
        external_url=env.get(EXTERNAL_URL_VAR, ""),
    )
