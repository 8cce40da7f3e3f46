from .loader import DocumentLoader
from .models import Document

__all__ = [
    "Document",
    "DocumentLoader",
]
