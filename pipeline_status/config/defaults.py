"""Default configuration parameters for the pipeline status resource."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class S3Params:
    """S3 client and object parameters."""
    region_name: str = "us-east-1"
    max_retries: int = 12
    acl: str = "private"
    content_type: str = "text/plain"


@dataclass(frozen=True)
class VersionParams:
    """Version numbering parameters."""
    initial_version: str = "1"        # Reported by check before any start
    pre_start_build: str = "0"        # Build number seeded before the first start


@dataclass(frozen=True)
class WaitParams:
    """Require-ready polling parameters."""
    retry_after: timedelta = timedelta(minutes=1)


@dataclass(frozen=True)
class DebugParams:
    """Debug request dump parameters."""
    check_prefix: str = "checkdbg"
    in_prefix: str = "indbg"
    out_prefix: str = "outdbg"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    s3: S3Params
    versions: VersionParams
    wait: WaitParams
    debug: DebugParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        s3=S3Params(),
        versions=VersionParams(),
        wait=WaitParams(),
        debug=DebugParams(),
    )
