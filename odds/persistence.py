"""JSON persistence of state under the user's data directory."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar, TypeVar

from odds import paths

T = TypeVar("T", bound="Persistable")


class PersistenceError(Exception):
    """Raised when state cannot be saved or loaded."""


class Persistable(ABC):
    """State that is stored as pretty-printed JSON in ``FILE``."""

    FILE: ClassVar[str]

    def before_save(self) -> None:
        """Hook run just before saving."""

    def save(self) -> None:
        """Write the state to its persistence file."""
        self.before_save()

        path = paths.persistence_path(self.FILE)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"Failed to create directory structure: {path.parent}"
            ) from exc

        try:
            contents = json.dumps(self.to_dict(), indent=2)
        except (TypeError, ValueError) as exc:
            raise PersistenceError("Failed to serialise data to JSON.") from exc

        try:
            path.write_text(contents, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to write persistence file to {path}") from exc

    @classmethod
    def load(cls: type[T]) -> T:
        """Read the state from its persistence file."""
        path = paths.persistence_path(cls.FILE)

        try:
            data = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Failed to read file at {path}") from exc

        try:
            return cls.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise PersistenceError("Failed to deserialise persistence JSON.") from exc

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible form of the state."""

    @classmethod
    @abstractmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Build the state from its JSON-compatible form."""