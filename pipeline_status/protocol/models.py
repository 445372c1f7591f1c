"""Request and response models for the check, in and out commands."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..config.source import Source, parse_source
from ..errors import ConfigurationError
from ..state.models import StatusAction


@dataclass(frozen=True)
class Version:
    """Version cursor exchanged with the orchestrator."""
    number: str = ""

    @classmethod
    def from_dict(cls, raw: Optional[dict[str, Any]]) -> "Version":
        if not raw:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigurationError("version must be a JSON object")
        number = raw.get("number")
        return cls(number="" if number is None else str(number))

    def to_dict(self) -> dict[str, str]:
        return {"number": self.number}


@dataclass(frozen=True)
class MetadataField:
    """Name/value pair shown alongside a version."""
    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class VersionResponse:
    """Response of the ``in`` and ``out`` commands."""
    version: Version
    metadata: list[MetadataField] = field(default_factory=list)

    @classmethod
    def for_build(cls, build_number: str) -> "VersionResponse":
        return cls(
            version=Version(number=build_number),
            metadata=[MetadataField(name="number", value=build_number)]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version.to_dict(),
            "metadata": [m.to_dict() for m in self.metadata],
        }


def _require_object(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ConfigurationError("request must be a JSON object")
    return raw


@dataclass(frozen=True)
class CheckRequest:
    source: Source
    version: Version

    @classmethod
    def from_dict(cls, raw: Any) -> "CheckRequest":
        raw = _require_object(raw)
        return cls(
            source=parse_source(raw.get("source")),
            version=Version.from_dict(raw.get("version"))
        )


@dataclass(frozen=True)
class InRequest:
    source: Source
    version: Version
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "InRequest":
        raw = _require_object(raw)
        return cls(
            source=parse_source(raw.get("source")),
            version=Version.from_dict(raw.get("version")),
            params=raw.get("params") or {}
        )


@dataclass(frozen=True)
class OutRequest:
    source: Source
    action: StatusAction

    @classmethod
    def from_dict(cls, raw: Any) -> "OutRequest":
        raw = _require_object(raw)
        params = raw.get("params") or {}
        if not isinstance(params, dict):
            raise ConfigurationError("params must be a JSON object")

        action = params.get("action")
        try:
            status_action = StatusAction(action)
        except ValueError as e:
            valid = ", ".join(a.value for a in StatusAction)
            raise ConfigurationError(
                f"unknown action {action!r}; expected one of: {valid}"
            ) from e

        return cls(
            source=parse_source(raw.get("source")),
            action=status_action
        )
