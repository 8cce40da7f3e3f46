# parsers/base.py

from abc import ABC, abstractmethod

from mdqa_kit.loading.models import Document

from .models import ParsedDocument


class DocumentParser(ABC):
    @abstractmethod
    def parse(self, document: Document) -> ParsedDocument:
        """
        Segment a document into a section tree.

        Requirements:
        - Deterministic output for same input
        - Malformed input produces warnings, never exceptions
        - No entry IDs generated
        """
        raise NotImplementedError
