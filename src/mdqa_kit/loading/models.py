# src/mdqa_kit/loading/models.py

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Document:
    """One Markdown source file.

    `relative_path` is POSIX-style and relative to the loader root; entry
    identifiers are derived from it.
    """

    path: Path
    relative_path: str
    text: str
