from .builder import IndexBuilder
from .index import Index
from .store import dumps_index, load_index, save_index
from .tokenizer import tokenize

__all__ = [
    "Index",
    "IndexBuilder",
    "dumps_index",
    "load_index",
    "save_index",
    "tokenize",
]
