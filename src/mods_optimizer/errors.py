"""Exceptions raised while reading saved character data."""

from collections.abc import Mapping
from typing import Any


class ModsOptimizerError(Exception):
    """Base exception for the mods optimizer package."""


class CharacterDeserializationError(ModsOptimizerError, ValueError):
    """Raised when a saved payload is missing a mandatory key or is malformed."""

    def __init__(self, message: str, base_id: str | None = None) -> None:
        self.base_id = base_id
        if base_id:
            message = f"{base_id}: {message}"
        super().__init__(message)


class UnsupportedVersionError(CharacterDeserializationError):
    """Raised when a saved roster carries a version we cannot read."""

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f"Unsupported roster version: {version!r}")


def require(data: object, key: str, owner: str) -> Any:
    """Return data[key], raising CharacterDeserializationError if it is missing."""
    ensure_mapping(data, owner)
    if key not in data:
        raise CharacterDeserializationError(f"{owner} is missing {key!r}")
    return data[key]


def ensure_mapping(data: object, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise CharacterDeserializationError(
            f"{owner} must be an object, got {type(data).__name__}"
        )
    return data
