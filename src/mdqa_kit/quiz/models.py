# quiz/models.py

from dataclasses import dataclass

from mdqa_kit.extraction.models import QAEntry


@dataclass(frozen=True)
class Flashcard:
    entry_id: str
    question: str
    answer: str
    code: tuple[str, ...] = ()

    @classmethod
    def from_entry(cls, entry: QAEntry) -> "Flashcard":
        return cls(
            entry_id=entry.id,
            question=entry.question,
            answer=entry.short_answer,
            code=tuple(block.text for block in entry.code_blocks),
        )
