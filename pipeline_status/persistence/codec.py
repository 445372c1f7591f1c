"""YAML codec for pipeline status documents."""

from datetime import date
from typing import Any, Optional

import yaml

from ..errors import MalformedStatusError
from ..state.models import BuildFailure, PipelineState, PipelineStatus


def _text(value: Any) -> str:
    # yaml.safe_load turns ``build: 3`` into an int and bare timestamps into datetimes
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def status_to_dict(status: PipelineStatus) -> dict[str, Any]:
    """Convert a status into the document mapping, in document key order."""
    document: dict[str, Any] = {
        "pipeline": status.pipeline,
        "team": status.team,
        "build": status.build_number,
        "last_modified": status.last_modified,
        "state": status.state.value,
    }
    if status.failure is not None:
        document["failure"] = {
            "job": status.failure.job_name,
            "build": status.failure.build_name,
            "details": status.failure.details_url,
        }
    return document


def status_from_dict(document: dict[str, Any]) -> PipelineStatus:
    """Build a status from a decoded document mapping."""
    raw_state = _text(document.get("state"))
    try:
        state = PipelineState(raw_state)
    except ValueError as e:
        raise MalformedStatusError(
            f"Unknown pipeline state: {raw_state!r}",
            raw_data=raw_state
        ) from e

    failure: Optional[BuildFailure] = None
    raw_failure = document.get("failure")
    if raw_failure is not None:
        if not isinstance(raw_failure, dict):
            raise MalformedStatusError(
                "Status failure record must be a mapping",
                raw_data=repr(raw_failure)
            )
        failure = BuildFailure(
            job_name=_text(raw_failure.get("job")),
            build_name=_text(raw_failure.get("build")),
            details_url=_text(raw_failure.get("details")),
        )

    return PipelineStatus(
        pipeline=_text(document.get("pipeline")),
        team=_text(document.get("team")),
        build_number=_text(document.get("build")),
        last_modified=_text(document.get("last_modified")),
        state=state,
        failure=failure,
    )


def encode_status(status: PipelineStatus) -> bytes:
    """Serialize a status document to YAML bytes."""
    return yaml.safe_dump(
        status_to_dict(status),
        default_flow_style=False,
        sort_keys=False
    ).encode("utf-8")


def decode_status(data: bytes) -> PipelineStatus:
    """
    Deserialize a status document.

    Raises:
        MalformedStatusError: If the bytes are not a YAML mapping describing a status
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise MalformedStatusError(
            f"Status document is not valid YAML: {e}",
            raw_data=data.decode("utf-8", errors="replace")
        ) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise MalformedStatusError(
            "Status document must be a mapping",
            raw_data=data.decode("utf-8", errors="replace")
        )

    return status_from_dict(document)
