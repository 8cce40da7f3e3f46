from .base import DocumentParser
from .markdown_parser import MarkdownParser, parse_markdown
from .models import BlockKind, ContentBlock, ParsedDocument, Section, SectionTree

__all__ = [
    "BlockKind",
    "ContentBlock",
    "DocumentParser",
    "MarkdownParser",
    "ParsedDocument",
    "Section",
    "SectionTree",
    "parse_markdown",
]
