from . import patterns
from .classifier import Language, classify_language
from .extractor import QAExtractor
from .models import CodeBlock, ExtractionResult, QAEntry

__all__ = [
    "CodeBlock",
    "ExtractionResult",
    "Language",
    "QAEntry",
    "QAExtractor",
    "classify_language",
    "patterns",
]
