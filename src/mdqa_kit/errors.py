# src/mdqa_kit/errors.py

from dataclasses import dataclass
from pathlib import Path
from typing import Any


class MdqaError(Exception):
    """Base class for every error raised by mdqa-kit."""


class DocumentReadError(MdqaError, OSError):
    """A Markdown file could not be read or decoded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read document '{self.path}': {reason}")


class DuplicateIdentifierError(MdqaError):
    """Two entries resolved to the same identifier. Fatal for the whole build."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Duplicate entry identifier '{identifier}'")


class EntryNotFoundError(MdqaError, KeyError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Entry '{identifier}' not found")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


@dataclass(frozen=True)
class StructuralWarning:
    """Non-fatal problem found in a source document.

    Collected alongside the output; never raised.
    """

    path: str
    line: int
    kind: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "kind": self.kind,
            "message": self.message,
        }
