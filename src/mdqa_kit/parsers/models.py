# parsers/models.py

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from mdqa_kit.errors import StructuralWarning
from mdqa_kit.loading.models import Document


class BlockKind(str, Enum):
    """Kind of raw content directly under a section."""

    PARAGRAPH = "paragraph"
    CODE = "code"


@dataclass(frozen=True)
class ContentBlock:
    kind: BlockKind
    text: str
    line: int
    info: str = ""  # fence info string, code blocks only


@dataclass(frozen=True)
class Section:
    """A heading-delimited node stored in a SectionTree arena.

    `parent` and `children` are arena indices, not object references.
    """

    index: int
    level: int
    heading: str
    ordinal: int
    parent: int | None
    children: tuple[int, ...]
    blocks: tuple[ContentBlock, ...]
    line: int

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class SectionTree:
    """Arena of sections. `nodes[0]` is the synthetic level-0 root."""

    nodes: tuple[Section, ...]

    @property
    def root(self) -> Section:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Section:
        return self.nodes[index]

    def children(self, section: Section) -> list[Section]:
        return [self.nodes[i] for i in section.children]

    def parent(self, section: Section) -> Section | None:
        if section.parent is None:
            return None
        return self.nodes[section.parent]

    def walk(self, start: Section | None = None) -> Iterator[Section]:
        """Pre-order traversal in document order, without recursion."""
        stack = [start.index if start is not None else 0]
        while stack:
            section = self.nodes[stack.pop()]
            yield section
            stack.extend(reversed(section.children))

    def path(self, section: Section) -> list[str]:
        """Heading breadcrumb from the top-level section down to `section`."""
        headings: list[str] = []
        current: Section | None = section
        while current is not None and not current.is_root:
            headings.append(current.heading)
            current = self.parent(current)
        return list(reversed(headings))


@dataclass(frozen=True)
class ParsedDocument:
    document: Document
    tree: SectionTree
    warnings: tuple[StructuralWarning, ...]
