# extraction/models.py

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from mdqa_kit.errors import StructuralWarning

from .classifier import Language


@dataclass(frozen=True)
class CodeBlock:
    language: Language
    text: str
    ordinal: int
    info: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language.value,
            "text": self.text,
            "ordinal": self.ordinal,
            "info": self.info,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CodeBlock":
        return cls(
            language=Language(data["language"]),
            text=data["text"],
            ordinal=data["ordinal"],
            info=data.get("info", ""),
        )


@dataclass(frozen=True)
class QAEntry:
    """One question with its interview answer, code and follow-ups.

    `section_index` points back into the source document's SectionTree;
    it locates the origin and does not own the section.
    """

    id: str
    question: str
    short_answer: str
    code_blocks: tuple[CodeBlock, ...]
    follow_ups: tuple["QAEntry", ...]
    source_path: str
    section_index: int
    section_path: tuple[str, ...] = ()
    body: str = ""

    def walk(self) -> Iterator["QAEntry"]:
        """This entry and every nested follow-up, depth-first in source order."""
        stack = [self]
        while stack:
            entry = stack.pop()
            yield entry
            stack.extend(reversed(entry.follow_ups))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "short_answer": self.short_answer,
            "code_blocks": [block.to_dict() for block in self.code_blocks],
            "follow_ups": [entry.id for entry in self.follow_ups],
            "source_path": self.source_path,
            "section_index": self.section_index,
            "section_path": list(self.section_path),
            "body": self.body,
        }


@dataclass(frozen=True)
class ExtractionResult:
    entries: tuple[QAEntry, ...]
    warnings: tuple[StructuralWarning, ...]

    def all_entries(self) -> Iterator[QAEntry]:
        for entry in self.entries:
            yield from entry.walk()
