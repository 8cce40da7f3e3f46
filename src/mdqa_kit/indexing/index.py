# indexing/index.py

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from mdqa_kit.errors import EntryNotFoundError, StructuralWarning
from mdqa_kit.extraction.models import CodeBlock, QAEntry

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class Index:
    """Read-only lookup table plus inverted index over QA entries.

    Built by IndexBuilder; never mutated afterwards. `entries` holds every
    entry including nested follow-ups, `roots` the top-level ids in corpus
    order.

    Example:
        >>> index = build_index("notes/")
        >>> ids = index.query(["nolock", "blocking"])
        >>> index.lookup(sorted(ids)[0]).short_answer
    """

    def __init__(
        self,
        entries: Mapping[str, QAEntry],
        postings: Mapping[str, frozenset[str]],
        roots: Iterable[str] = (),
        diagnostics: Iterable[StructuralWarning] = (),
        min_token_length: int = 2,
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self._postings = MappingProxyType(
            {term: frozenset(ids) for term, ids in postings.items()}
        )
        self.roots: tuple[str, ...] = tuple(roots)
        self.diagnostics: tuple[StructuralWarning, ...] = tuple(diagnostics)
        self.min_token_length = min_token_length

    @property
    def entries(self) -> Mapping[str, QAEntry]:
        return self._entries

    @property
    def postings(self) -> Mapping[str, frozenset[str]]:
        return self._postings

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __iter__(self) -> Iterator[QAEntry]:
        return iter(self._entries.values())

    def lookup(self, entry_id: str) -> QAEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            logger.error("Entry not found: %s", entry_id)
            raise EntryNotFoundError(entry_id) from None

    def get(self, entry_id: str) -> QAEntry | None:
        return self._entries.get(entry_id)

    def top_level(self) -> list[QAEntry]:
        return [self._entries[entry_id] for entry_id in self.roots]

    def terms(self) -> list[str]:
        return sorted(self._postings)

    def query(self, terms: Iterable[str]) -> set[str]:
        """
        Ids of entries containing every term.

        Terms are normalised like indexed text; a term that expands to
        several tokens needs all of them. An empty query, or any term that
        is missing from the index, gives an empty set. A bare string is
        rejected; wrap a single term in a list.
        """
        if isinstance(terms, str):
            raise TypeError("terms must be an iterable of strings, not a str")

        tokens: list[str] = []
        for term in terms:
            expanded = tokenize(term, self.min_token_length)
            if not expanded:
                return set()
            tokens.extend(expanded)
        if not tokens:
            return set()

        # Smallest posting first keeps the intersection cheap
        postings = []
        for token in set(tokens):
            ids = self._postings.get(token)
            if not ids:
                return set()
            postings.append(ids)
        postings.sort(key=len)

        result = set(postings[0])
        for ids in postings[1:]:
            result &= ids
            if not result:
                break
        return result

    def stats(self) -> dict[str, Any]:
        languages: Counter[str] = Counter(
            block.language.value for entry in self for block in entry.code_blocks
        )
        return {
            "entries": len(self._entries),
            "top_level_entries": len(self.roots),
            "terms": len(self._postings),
            "code_blocks": sum(languages.values()),
            "languages": dict(sorted(languages.items())),
            "warnings": len(self.diagnostics),
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form. Postings are sorted, so equal indexes dump equally."""
        return {
            "entries": {
                entry_id: self._entries[entry_id].to_dict()
                for entry_id in sorted(self._entries)
            },
            "postings": {
                term: sorted(self._postings[term]) for term in sorted(self._postings)
            },
            "roots": list(self.roots),
            "diagnostics": [warning.to_dict() for warning in self.diagnostics],
            "min_token_length": self.min_token_length,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Index":
        raw_entries: Mapping[str, Mapping[str, Any]] = data["entries"]
        entries: dict[str, QAEntry] = {}

        def resolve(entry_id: str) -> QAEntry:
            if entry_id not in entries:
                raw = raw_entries[entry_id]
                entries[entry_id] = QAEntry(
                    id=raw["id"],
                    question=raw["question"],
                    short_answer=raw["short_answer"],
                    code_blocks=tuple(
                        CodeBlock.from_dict(block) for block in raw["code_blocks"]
                    ),
                    # Follow-up nesting is bounded by heading depth
                    follow_ups=tuple(resolve(child) for child in raw["follow_ups"]),
                    source_path=raw["source_path"],
                    section_index=raw["section_index"],
                    section_path=tuple(raw.get("section_path", ())),
                    body=raw.get("body", ""),
                )
            return entries[entry_id]

        for entry_id in raw_entries:
            resolve(entry_id)

        return cls(
            entries=entries,
            postings={term: frozenset(ids) for term, ids in data["postings"].items()},
            roots=data.get("roots", ()),
            diagnostics=[
                StructuralWarning(**warning) for warning in data.get("diagnostics", ())
            ],
            min_token_length=data.get("min_token_length", 2),
        )
