"""Source configuration validation."""

import re
from dataclasses import dataclass
from typing import Any

from ..errors import ConfigurationError
from .source import Source

SUPPORTED_DRIVERS = ("", "s3")

_DECIMAL = re.compile(r"\d+")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class SourceValidator:
    """Validates resource source configuration."""

    @staticmethod
    def validate_source(source: Source) -> list[ValidationError]:
        """Validate a source, returning every problem found."""
        errors = []

        if source.driver not in SUPPORTED_DRIVERS:
            errors.append(ValidationError(
                field="driver",
                message="Unknown driver; only s3 is supported",
                value=source.driver
            ))

        if not source.bucket:
            errors.append(ValidationError(
                field="bucket",
                message="Must be set",
                value=source.bucket
            ))

        if not source.key:
            errors.append(ValidationError(
                field="key",
                message="Must be set",
                value=source.key
            ))

        if source.initial_version and not _DECIMAL.fullmatch(source.initial_version):
            errors.append(ValidationError(
                field="initial_version",
                message="Must be a non-negative decimal number",
                value=source.initial_version
            ))

        if (source.access_key_id and not source.secret_access_key) or \
                (source.secret_access_key and not source.access_key_id):
            errors.append(ValidationError(
                field="access_key_id",
                message="access_key_id and secret_access_key must be set together",
                value=source.access_key_id
            ))

        return errors

    @classmethod
    def require_valid(cls, source: Source) -> Source:
        """
        Return ``source`` unchanged if it is valid.

        Raises:
            ConfigurationError: Listing every validation error
        """
        errors = cls.validate_source(source)
        if errors:
            summary = "; ".join(f"{e.field}: {e.message} (value: {e.value!r})" for e in errors)
            raise ConfigurationError(f"invalid source: {summary}", errors=errors)
        return source
