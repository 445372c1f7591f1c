"""Resource ``source`` configuration as supplied by the pipeline."""

from dataclasses import dataclass, fields
from datetime import timedelta
from typing import Any, Optional

import structlog

from ..errors import ConfigurationError
from ..utils.time import parse_duration
from .defaults import get_default_config

logger = structlog.get_logger(__name__)

_TRUE_STRINGS = {"1", "t", "true", "y", "yes", "on"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Source:
    """Resource source configuration."""

    bucket: str = ""
    key: str = ""
    driver: str = ""

    # Versioning
    initial_version: str = ""
    require_ready: bool = False
    retry_after: str = ""

    # S3 access
    access_key_id: str = ""
    secret_access_key: str = ""
    session_token: str = ""
    use_iam_instance_profile: bool = False
    region_name: str = ""
    endpoint: str = ""
    disable_ssl: bool = False
    server_side_encryption: str = ""
    use_v2_signing: bool = False

    debug: str = ""

    @property
    def is_debug(self) -> bool:
        return _as_bool(self.debug)

    def retry_period(self) -> timedelta:
        """Require-ready poll interval, falling back to the default when unparsable or negative."""
        default = get_default_config().wait.retry_after
        if not self.retry_after:
            return default
        try:
            period = parse_duration(self.retry_after)
        except ValueError:
            period = None

        if period is None or period < timedelta(0):
            logger.warning(
                "Invalid retry_after, using default",
                retry_after=self.retry_after,
                default_seconds=default.total_seconds()
            )
            return default
        return period

    def redacted(self) -> dict[str, Any]:
        """Source fields with credentials masked, for logging."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("secret_access_key", "session_token") and value:
                value = "***"
            result[f.name] = value
        return result


_BOOL_FIELDS = {"require_ready", "use_iam_instance_profile", "disable_ssl", "use_v2_signing"}


def parse_source(raw: Optional[dict[str, Any]]) -> Source:
    """
    Build a ``Source`` from the decoded ``source`` object of a request.

    Unknown keys are ignored so that one source block can be shared with
    other resource types.

    Raises:
        ConfigurationError: If ``raw`` is not a JSON object
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("source must be a JSON object")

    kwargs: dict[str, Any] = {}
    for f in fields(Source):
        if f.name not in raw:
            continue
        value = raw[f.name]
        kwargs[f.name] = _as_bool(value) if f.name in _BOOL_FIELDS else _as_text(value)

    return Source(**kwargs)
