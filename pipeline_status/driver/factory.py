"""Construction of a status driver from resource configuration."""

from typing import Optional

from ..config.source import Source
from ..config.validation import SourceValidator
from ..persistence.s3_store import S3Store
from ..persistence.store import Store
from ..state.models import BuildIdentity
from .status_driver import StatusDriver


def driver_from_source(
    source: Source,
    identity: BuildIdentity,
    store: Optional[Store] = None
) -> StatusDriver:
    """
    Build a driver bound to the key named by ``source``.

    Args:
        source: Validated or unvalidated source configuration
        identity: Identity of the invoking build
        store: Store override; an S3 store is built from ``source`` when omitted

    Raises:
        ConfigurationError: If the source is invalid
    """
    SourceValidator.require_valid(source)

    if store is None:
        store = S3Store.from_source(source)

    return StatusDriver(
        store=store,
        key=source.key,
        identity=identity,
        initial_version=source.initial_version,
        server_side_encryption=source.server_side_encryption or None
    )
