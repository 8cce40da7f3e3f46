# Configuration
from .config import ExtractionConfig, load_config

# Errors
from .errors import (
    DocumentReadError,
    DuplicateIdentifierError,
    EntryNotFoundError,
    MdqaError,
    StructuralWarning,
)

# Extraction
from .extraction import CodeBlock, Language, QAEntry, QAExtractor, classify_language

# Indexing
from .indexing import Index, IndexBuilder, load_index, save_index, tokenize

# Loading
from .loading import Document, DocumentLoader

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Parsing
from .parsers import MarkdownParser, Section, SectionTree, parse_markdown

# Pipeline
from .pipeline import IndexHolder, build_index, extract_document

# Quiz
from .quiz import Flashcard, draw_quiz

__all__ = [
    # Configuration
    "ExtractionConfig",
    "load_config",
    # Errors
    "DocumentReadError",
    "DuplicateIdentifierError",
    "EntryNotFoundError",
    "MdqaError",
    "StructuralWarning",
    # Extraction
    "CodeBlock",
    "Language",
    "QAEntry",
    "QAExtractor",
    "classify_language",
    # Indexing
    "Index",
    "IndexBuilder",
    "load_index",
    "save_index",
    "tokenize",
    # Loading
    "Document",
    "DocumentLoader",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsing
    "MarkdownParser",
    "Section",
    "SectionTree",
    "parse_markdown",
    # Pipeline
    "IndexHolder",
    "build_index",
    "extract_document",
    # Quiz
    "Flashcard",
    "draw_quiz",
]
