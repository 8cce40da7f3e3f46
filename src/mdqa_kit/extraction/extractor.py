# extraction/extractor.py

import logging
from dataclasses import dataclass, field
from time import monotonic

from mdqa_kit.config import ExtractionConfig
from mdqa_kit.errors import StructuralWarning
from mdqa_kit.observability import names
from mdqa_kit.observability.base import MetricsHook, NoOpMetricsHook
from mdqa_kit.parsers.models import BlockKind, ContentBlock, ParsedDocument, Section

from . import patterns
from .classifier import classify_language
from .models import CodeBlock, ExtractionResult, QAEntry

logger = logging.getLogger(__name__)


@dataclass
class _PendingItem:
    item: patterns.NumberedItem
    line: int
    extra: list[str] = field(default_factory=list)
    code: list[ContentBlock] = field(default_factory=list)


class QAExtractor:
    """
    Turns a section tree into QAEntry objects.

    - A question heading starts an entry; its direct blocks give the short
      answer, body and code blocks
    - Follow-up sections under a question become nested entries
    - Extraction never fails: gaps are reported as StructuralWarning
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or ExtractionConfig()
        self.metrics_hook = metrics_hook

    def extract(self, parsed: ParsedDocument) -> ExtractionResult:
        start = monotonic()
        run = _ExtractionRun(parsed, self.config)
        entries = run.extract()

        result = ExtractionResult(entries=tuple(entries), warnings=tuple(run.warnings))
        all_entries = list(result.all_entries())

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.EXTRACTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.ENTRIES_EXTRACTED, len(all_entries))
        self.metrics_hook.increment(
            names.CODE_BLOCKS_EXTRACTED, sum(len(e.code_blocks) for e in all_entries)
        )
        if run.warnings:
            self.metrics_hook.increment(
                names.STRUCTURAL_WARNINGS_TOTAL, len(run.warnings)
            )
        logger.debug(
            "Extracted %d entries (%d with follow-ups) from %s",
            len(entries),
            len(all_entries),
            parsed.document.relative_path,
        )
        return result


class _ExtractionRun:
    """State for extracting one document. Never shared between documents."""

    def __init__(self, parsed: ParsedDocument, config: ExtractionConfig) -> None:
        self.tree = parsed.tree
        self.source = parsed.document.relative_path
        self.config = config
        self.warnings: list[StructuralWarning] = []

    def extract(self) -> list[QAEntry]:
        entries: list[QAEntry] = []
        stack = list(reversed(self.tree.root.children))

        while stack:
            section = self.tree[stack.pop()]
            deferred: list[int] = []
            if patterns.is_follow_up_heading(section.heading, self.config):
                # Follow-ups owned by a question are consumed below and never
                # reach this point
                self._warn(
                    section.line,
                    "orphan_follow_up",
                    f"Follow-up block '{section.heading}' is not under a question",
                )
                entries.extend(
                    self._follow_ups(
                        section, parent_id=None, start=len(entries) + 1, deferred=deferred
                    )
                )
            elif patterns.is_question_heading(section.heading, self.config):
                entries.append(self._entry(section, self._next_id(entries), deferred))
            else:
                deferred.extend(section.children)

            stack.extend(reversed(deferred))

        return entries

    def _next_id(self, entries: list[QAEntry]) -> str:
        return f"{self.source}#{len(entries) + 1}"

    def _entry(self, section: Section, entry_id: str, deferred: list[int]) -> QAEntry:
        """
        Entry for a question section.

        Follow-up children are consumed here. Other children are appended to
        `deferred` in document order so the main walk still finds questions
        nested below them.
        """
        short_answer, used = self._short_answer(section.blocks)
        if not short_answer:
            self._warn(
                section.line,
                "missing_short_answer",
                f"No short answer found for '{section.heading}'",
            )

        body = "\n\n".join(
            block.text
            for i, block in enumerate(section.blocks)
            if block.kind == BlockKind.PARAGRAPH and i not in used
        )

        follow_ups: list[QAEntry] = []
        for child in self.tree.children(section):
            if patterns.is_follow_up_heading(child.heading, self.config):
                follow_ups.extend(
                    self._follow_ups(
                        child, entry_id, start=len(follow_ups) + 1, deferred=deferred
                    )
                )
            else:
                deferred.append(child.index)

        return QAEntry(
            id=entry_id,
            question=patterns.clean_question(section.heading) or section.heading,
            short_answer=short_answer,
            code_blocks=self._code_blocks(section.blocks),
            follow_ups=tuple(follow_ups),
            source_path=self.source,
            section_index=section.index,
            section_path=tuple(self.tree.path(section)),
            body=body,
        )

    def _short_answer(self, blocks: tuple[ContentBlock, ...]) -> tuple[str, set[int]]:
        """Text of the first short-answer paragraph and the block indices it used."""
        for i, block in enumerate(blocks):
            if block.kind != BlockKind.PARAGRAPH:
                continue
            if not patterns.is_short_answer_marker(block.text, self.config):
                continue

            text = patterns.strip_short_answer(block.text, self.config)
            if text:
                return text, {i}

            # Label alone: the answer is the next quoted or emphasised paragraph
            if i + 1 < len(blocks):
                following = blocks[i + 1]
                if following.kind == BlockKind.PARAGRAPH and (
                    patterns.is_quoted(following.text)
                    or patterns.is_emphasized(following.text)
                ):
                    text = patterns.unquote(following.text).strip()
                    return text, {i, i + 1}
            return "", {i}
        return "", set()

    def _code_blocks(self, blocks: tuple[ContentBlock, ...]) -> tuple[CodeBlock, ...]:
        code = [block for block in blocks if block.kind == BlockKind.CODE]
        return tuple(
            CodeBlock(
                language=classify_language(block.info),
                text=block.text,
                ordinal=ordinal,
                info=block.info,
            )
            for ordinal, block in enumerate(code)
        )

    def _follow_ups(
        self,
        section: Section,
        parent_id: str | None,
        start: int,
        deferred: list[int],
    ) -> list[QAEntry]:
        """Entries for a follow-up block: its list items, then its sub-sections."""
        prefix = parent_id if parent_id is not None else f"{self.source}#"
        separator = "." if parent_id is not None else ""
        entries: list[QAEntry] = []

        def next_id() -> str:
            return f"{prefix}{separator}{start + len(entries)}"

        pending: list[_PendingItem] = []
        for block in section.blocks:
            if block.kind == BlockKind.CODE:
                if pending:
                    pending[-1].code.append(block)
                continue
            if patterns.has_numbered_item(block.text):
                pending.extend(
                    _PendingItem(item=item, line=block.line)
                    for item in patterns.parse_numbered_items(block.text)
                )
            elif pending:
                pending[-1].extra.append(patterns.unquote(block.text).strip())

        for current in pending:
            item = current.item
            if not item.question:
                self._warn(current.line, "empty_question", "List item has no text")
                continue
            answer = "\n\n".join(part for part in [item.answer, *current.extra] if part)
            if not answer:
                self._warn(
                    current.line,
                    "missing_short_answer",
                    f"No answer found for follow-up '{item.question}'",
                )
            entries.append(
                QAEntry(
                    id=next_id(),
                    question=item.question,
                    short_answer=answer,
                    code_blocks=self._code_blocks(tuple(current.code)),
                    follow_ups=(),
                    source_path=self.source,
                    section_index=section.index,
                    section_path=tuple(self.tree.path(section)),
                )
            )

        for child in self.tree.children(section):
            entries.append(self._entry(child, next_id(), deferred))

        return entries

    def _warn(self, line: int, kind: str, message: str) -> None:
        logger.warning("%s:%d: %s", self.source, line, message)
        self.warnings.append(
            StructuralWarning(path=self.source, line=line, kind=kind, message=message)
        )
