"""Resource source configuration, defaults and validation."""

from .defaults import DefaultConfig, get_default_config
from .source import Source, parse_source
from .validation import SourceValidator, ValidationError

__all__ = [
    "DefaultConfig",
    "get_default_config",
    "Source",
    "parse_source",
    "SourceValidator",
    "ValidationError",
]
