# parsers/markdown_parser.py

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from time import monotonic

from mdqa_kit.errors import StructuralWarning
from mdqa_kit.loading.models import Document
from mdqa_kit.observability import names
from mdqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DocumentParser
from .models import BlockKind, ContentBlock, ParsedDocument, Section, SectionTree

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.*?)[ \t]*$")
CLOSING_HASHES_PATTERN = re.compile(r"(?:^|[ \t]+)#+$")
# Looks like a heading but is not one: empty ATX heading or more than six '#'
BAD_HEADING_PATTERN = re.compile(r"^ {0,3}(?:#{1,6}[ \t]*$|#{7,}(?:[ \t]|$))")
# Fences may sit inside indented list items, so indentation is not limited
FENCE_OPEN_PATTERN = re.compile(r"^([ \t]*)(`{3,}|~{3,})(.*)$")
FENCE_CLOSE_PATTERN = re.compile(r"^[ \t]*(`{3,}|~{3,})[ \t]*$")


@dataclass
class _Node:
    level: int
    heading: str
    line: int
    parent: int | None
    ordinal: int
    children: list[int] = field(default_factory=list)
    blocks: list[ContentBlock] = field(default_factory=list)


@dataclass
class _Fence:
    marker: str
    indent: int
    info: str
    line: int
    lines: list[str] = field(default_factory=list)

    def closes(self, line: str) -> bool:
        match = FENCE_CLOSE_PATTERN.match(line)
        if match is None:
            return False
        run = match.group(1)
        return run[0] == self.marker[0] and len(run) >= len(self.marker)

    def add(self, line: str) -> None:
        # Drop up to `indent` leading spaces, as the opening fence did
        stripped = len(line) - len(line.lstrip(" "))
        self.lines.append(line[min(stripped, self.indent) :])


class MarkdownParser(DocumentParser):
    """
    Stack-based ATX heading segmenter.

    - Heading detection is suspended inside fenced code blocks
    - A fenced block is one atomic ContentBlock
    - Unterminated fences run to end of file and produce a warning
    """

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def parse(self, document: Document) -> ParsedDocument:
        start = monotonic()
        source = document.relative_path
        warnings: list[StructuralWarning] = []

        nodes = [_Node(level=0, heading="", line=0, parent=None, ordinal=0)]
        stack = [0]
        paragraph: list[str] = []
        paragraph_line = 0
        fence: _Fence | None = None

        def flush_paragraph() -> None:
            nonlocal paragraph
            if paragraph:
                nodes[stack[-1]].blocks.append(
                    ContentBlock(
                        kind=BlockKind.PARAGRAPH,
                        text="\n".join(paragraph),
                        line=paragraph_line,
                    )
                )
                paragraph = []

        def flush_fence(open_fence: _Fence) -> None:
            nodes[stack[-1]].blocks.append(
                ContentBlock(
                    kind=BlockKind.CODE,
                    text="\n".join(open_fence.lines),
                    line=open_fence.line,
                    info=open_fence.info,
                )
            )

        def warn(line: int, kind: str, message: str) -> None:
            logger.warning("%s:%d: %s", source, line, message)
            warnings.append(
                StructuralWarning(path=source, line=line, kind=kind, message=message)
            )

        for lineno, line in enumerate(document.text.splitlines(), start=1):
            if fence is not None:
                if fence.closes(line):
                    flush_fence(fence)
                    fence = None
                else:
                    fence.add(line)
                continue

            fence_match = FENCE_OPEN_PATTERN.match(line)
            if fence_match and not (
                fence_match.group(2)[0] == "`" and "`" in fence_match.group(3)
            ):
                flush_paragraph()
                fence = _Fence(
                    marker=fence_match.group(2),
                    indent=len(fence_match.group(1).expandtabs(4)),
                    info=fence_match.group(3).strip(),
                    line=lineno,
                )
                continue

            heading = self._match_heading(line)
            if heading is not None:
                flush_paragraph()
                level, text = heading
                while nodes[stack[-1]].level >= level:
                    stack.pop()
                parent = stack[-1]
                nodes.append(
                    _Node(
                        level=level,
                        heading=text,
                        line=lineno,
                        parent=parent,
                        ordinal=len(nodes[parent].children),
                    )
                )
                nodes[parent].children.append(len(nodes) - 1)
                stack.append(len(nodes) - 1)
                continue

            if BAD_HEADING_PATTERN.match(line):
                warn(lineno, "unrecognized_heading", f"Not a heading: {line.strip()!r}")

            if not line.strip():
                flush_paragraph()
            else:
                if not paragraph:
                    paragraph_line = lineno
                paragraph.append(line)

        if fence is not None:
            warn(
                fence.line,
                "unterminated_fence",
                "Code fence opened here is never closed",
            )
            flush_fence(fence)
        flush_paragraph()

        tree = self._freeze(nodes)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SEGMENTATION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.SECTIONS_CREATED, len(tree) - 1)
        if warnings:
            self.metrics_hook.increment(names.STRUCTURAL_WARNINGS_TOTAL, len(warnings))
        logger.debug("Segmented %s into %d sections", source, len(tree) - 1)

        return ParsedDocument(document=document, tree=tree, warnings=tuple(warnings))

    @staticmethod
    def _match_heading(line: str) -> tuple[int, str] | None:
        match = HEADING_PATTERN.match(line)
        if match is None:
            return None
        text = CLOSING_HASHES_PATTERN.sub("", match.group(2)).strip()
        if not text:
            return None
        return len(match.group(1)), text

    @staticmethod
    def _freeze(nodes: list[_Node]) -> SectionTree:
        return SectionTree(
            nodes=tuple(
                Section(
                    index=i,
                    level=node.level,
                    heading=node.heading,
                    ordinal=node.ordinal,
                    parent=node.parent,
                    children=tuple(node.children),
                    blocks=tuple(node.blocks),
                    line=node.line,
                )
                for i, node in enumerate(nodes)
            )
        )


def parse_markdown(
    text: str,
    path: str = "<memory>",
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ParsedDocument:
    """Segment Markdown text that did not come from a DocumentLoader."""
    document = Document(path=Path(path), relative_path=path, text=text)
    return MarkdownParser(metrics_hook=metrics_hook).parse(document)
